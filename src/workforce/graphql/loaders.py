from uuid import UUID

from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..records import repository as records_repo
from ..records.models import EmployerRecord


async def load_employers(keys: list[UUID]) -> list[EmployerRecord | None]:
    """Batch load employers by ID."""
    async with get_async_session() as session:
        employers = await records_repo.get_employers(session, keys)
        employers_map = {
            employer.id: EmployerRecord.model_validate(employer) for employer in employers
        }
        return [employers_map.get(key) for key in keys]


class Loaders:
    def __init__(self):
        self.employer_loader = DataLoader(load_fn=load_employers)
