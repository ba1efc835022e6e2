"""HTTP application for the Workforce API."""
