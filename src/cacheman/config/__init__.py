"""Configuration properties and provider detection."""
