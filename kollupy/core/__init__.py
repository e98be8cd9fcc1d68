"""Core building blocks: API client, upload models, monitor and helpers."""
