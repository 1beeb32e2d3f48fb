"""
Create Agent User Script
Creates an agent account from AGENT_EMAIL / AGENT_PASSWORD if it does not already exist.
Usage: python -m imf_api.scripts.create_user
"""

import asyncio
import os

from imf_api.database import AsyncSessionLocal, engine
from imf_api.exceptions import ConflictError
from imf_api.services import auth_service

async def create_user():
    email = os.getenv("AGENT_EMAIL")
    password = os.getenv("AGENT_PASSWORD")
    if not email or not password:
        print("AGENT_EMAIL and AGENT_PASSWORD are required to create a user.")
        return

    try:
        async with AsyncSessionLocal() as db:
            await auth_service.register_user(db, email, password)
    except ConflictError:
        print(f"User {email} already exists.")
        return
    finally:
        await engine.dispose()

    print(f"Successfully created user: {email}")

if __name__ == "__main__":
    asyncio.run(create_user())
