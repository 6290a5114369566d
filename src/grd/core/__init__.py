"""Core functionality: providers, API client, selection and downloads."""
