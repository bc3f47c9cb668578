"""Core components - credentials, API client, rendering and prompts"""

__version__ = "0.1.0"
