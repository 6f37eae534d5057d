import os

import pytest
from sqlmodel import SQLModel
from typer.testing import CliRunner

from cli import app, run
from src.core.config import settings
from src.core.database import engine, get_session, init_db
from src.core.security import decode_access_token
from src.apps.blog.repositories.post_repository import PostRepository

runner = CliRunner()


async def drop_tables():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


@pytest.fixture
def cli_database():
    run(init_db())

    yield

    run(drop_tables())


class TestCli:

    def test_create_user_prints_usable_token(self, cli_database):
        result = runner.invoke(app, ["create-user", "Ada", "ada@example.com"])

        assert result.exit_code == 0, result.output
        assert "Created user 1" in result.output
        token = result.output.strip().splitlines()[-1].split("Token: ")[-1]
        assert decode_access_token(token) == 1

    def test_create_user_rejects_duplicate_email(self, cli_database):
        runner.invoke(app, ["create-user", "Ada", "ada@example.com"])

        result = runner.invoke(app, ["create-user", "Ada Again", "ada@example.com"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_token_for_unknown_user(self, cli_database):
        result = runner.invoke(app, ["token", "99"])

        assert result.exit_code == 1

    def test_prune_thumbnails_removes_only_orphans(self, cli_database, upload_dir):
        for name in ("kept.png", "orphan.png"):
            with open(os.path.join(upload_dir, name), "wb") as f:
                f.write(b"img")
        run(
            PostRepository(get_session).create(  # type: ignore
                {
                    "title": "Kept",
                    "category": "Art",
                    "description": "References kept.png",
                    "thumbnail": "kept.png",
                }
            )
        )

        dry = runner.invoke(app, ["prune-thumbnails", "--dry-run"])
        assert dry.exit_code == 0, dry.output
        assert "orphan.png" in dry.output
        assert sorted(os.listdir(settings.UPLOAD_FOLDER)) == ["kept.png", "orphan.png"]

        result = runner.invoke(app, ["prune-thumbnails"])
        assert result.exit_code == 0, result.output
        assert os.listdir(settings.UPLOAD_FOLDER) == ["kept.png"]
