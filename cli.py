import asyncio
from typing import Awaitable, TypeVar

import typer

from src.core.bases.base_repository import RepositoryError
from src.core.database import engine, get_session, init_db
from src.core.security import create_access_token
from src.core.services.storage_service import StorageError, get_thumbnail_storage
from src.apps.blog.repositories.post_repository import PostRepository
from src.apps.users.repositories.user_repository import UserRepository

app = typer.Typer(help="Management commands for the blog API.")

T = TypeVar("T")


# ---------------------------
# Helpers
# ---------------------------
def run(coro: Awaitable[T]) -> T:
    """Run a coroutine and release pooled connections afterwards."""

    async def runner() -> T:
        try:
            return await coro
        finally:
            await engine.dispose()

    return asyncio.run(runner())


# ---------------------------
# Commands
# ---------------------------
@app.command("init-db")
def init_db_command():
    """Create database tables."""
    run(init_db())
    print("✅ Tables created")


@app.command()
def create_user(name: str, email: str):
    """Create a user and print an access token for it."""

    async def create():
        await init_db()
        repository = UserRepository(get_session)  # type:ignore
        if await repository.get_one(email=email):
            return None
        return await repository.create({"name": name, "email": email})

    try:
        user = run(create())
    except RepositoryError as e:
        print(f"❌ Could not create user: {e}")
        raise typer.Exit(1)

    if user is None:
        print(f"❌ A user with email {email} already exists.")
        raise typer.Exit(1)

    print(f"✅ Created user {user.id}")
    print(f"🔑 Token: {create_access_token(user.id)}")


@app.command()
def token(user_id: int):
    """Print a fresh access token for an existing user."""
    user = run(UserRepository(get_session).get(user_id))  # type:ignore
    if user is None:
        print(f"❌ User {user_id} not found.")
        raise typer.Exit(1)

    print(create_access_token(user.id))


@app.command()
def prune_thumbnails(
    dry_run: bool = typer.Option(False, "--dry-run", help="Only list the files that would be removed"),
):
    """Remove files in the upload folder that no post references."""
    storage = get_thumbnail_storage()
    referenced = run(PostRepository(get_session).referenced_thumbnails())  # type:ignore
    orphans = [name for name in storage.list_files() if name not in referenced]

    if not orphans:
        print("📁 No orphaned thumbnails.")
        return

    for name in orphans:
        if dry_run:
            print(f"  📄 {name}")
            continue
        try:
            asyncio.run(storage.delete(name))
            print(f"🗑️  Removed {name}")
        except StorageError as e:
            print(f"❌ {e}")

    if dry_run:
        print(f"{len(orphans)} orphaned thumbnail(s) found.")


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()
