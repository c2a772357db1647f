"""Data access and business operations behind the dashboard routes."""
