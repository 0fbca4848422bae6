#!/usr/bin/env python
import os
from plugins.facebook.config import get_facebook_settings
from config import get_settings

# Print environment variables
print("Environment variables:")
for key, value in os.environ.items():
    if key.startswith("FACEBOOK_"):
        print(f"{key} = {'*' * 8 if 'SECRET' in key else value}")

# Get settings
facebook_settings = get_facebook_settings()
main_settings = get_settings()

# Print Facebook settings
print("\nFacebook settings:")
for key, value in facebook_settings.model_dump().items():
    if key == "application" and value:
        value = {**value, "secret": "SET" if value.get("secret") else "NOT SET"}
    print(f"{key} = {value}")
print(f"client arguments = {sorted(facebook_settings.client_kwargs())}")

# Print main settings
print("\nMain settings:")
for key, value in main_settings.model_dump().items():
    if key != "SECRET_KEY":
        print(f"{key} = {value}")
