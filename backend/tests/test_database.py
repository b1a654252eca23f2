"""
Q&A Service — Storage Client Tests
====================================

What:  Tests for Database (schema creation, cascade, session scope, startup failure).
How:   Runs against a temporary SQLite file through aiosqlite.

What we test:
    ✅ connect() creates both tables, the question_id index and the cascading FK
    ✅ connect() is safe to call on an existing schema
    ✅ Deleting a question row removes its answers at the database level
    ✅ session() rolls back on error
    ✅ session() turns a failed COMMIT into DatabaseError and keeps nothing
    ✅ An unreachable database makes startup exit
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import delete, func, inspect, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Database
from app.exceptions import DatabaseError
from app.models import Answer, Question


async def _inspect(database, fn):
    async with database.engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: fn(inspect(sync_conn)))


class TestSchema:
    """Tests for Database.connect()."""

    @pytest.mark.asyncio
    async def test_connect_creates_tables(self, database):
        tables = await _inspect(database, lambda i: i.get_table_names())

        assert {"questions", "answers"} <= set(tables)

    @pytest.mark.asyncio
    async def test_answers_foreign_key_cascades(self, database):
        foreign_keys = await _inspect(database, lambda i: i.get_foreign_keys("answers"))

        assert len(foreign_keys) == 1
        fk = foreign_keys[0]
        assert fk["referred_table"] == "questions"
        assert fk["constrained_columns"] == ["question_id"]
        assert fk["options"].get("ondelete", "").upper() == "CASCADE"

    @pytest.mark.asyncio
    async def test_answers_question_id_indexed(self, database):
        indexes = await _inspect(database, lambda i: i.get_indexes("answers"))

        assert any(idx["column_names"] == ["question_id"] for idx in indexes)

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, database):
        await database.connect()

        assert await database.ping() is True


class TestCascade:
    """The ON DELETE CASCADE rule must hold on SQLite too (PRAGMA foreign_keys)."""

    @pytest.mark.asyncio
    async def test_deleting_question_removes_answers(self, database):
        async with database.session() as session:
            question = Question(text="Why?")
            session.add(question)
            await session.flush()
            session.add_all([
                Answer(question_id=question.id, user_id="u1", text="Because"),
                Answer(question_id=question.id, user_id="u2", text="Why not"),
            ])
            question_id = question.id

        async with database.session() as session:
            await session.execute(delete(Question).where(Question.id == question_id))

        async with database.session() as session:
            remaining = await session.scalar(select(func.count(Answer.id)))

        assert remaining == 0


class TestSessionScope:
    """Tests for Database.session()."""

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, database):
        with pytest.raises(RuntimeError):
            async with database.session() as session:
                session.add(Question(text="never stored"))
                await session.flush()
                raise RuntimeError("handler failed")

        async with database.session() as session:
            count = await session.scalar(select(func.count(Question.id)))

        assert count == 0

    @pytest.mark.asyncio
    async def test_failed_commit_raises_database_error(self, database):
        failing_commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

        with patch.object(AsyncSession, "commit", failing_commit):
            with pytest.raises(DatabaseError) as exc_info:
                async with database.session() as session:
                    session.add(Question(text="lost on commit"))
                    await session.flush()

        assert exc_info.value.context == {"operation": "commit"}
        failing_commit.assert_awaited_once()

        async with database.session() as session:
            count = await session.scalar(select(func.count(Question.id)))

        assert count == 0


class TestStartupFailure:
    """Startup must stop the process when the store is unusable."""

    @pytest.mark.asyncio
    async def test_ping_false_when_unreachable(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'qa.db'}")
        try:
            assert await db.ping() is False
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_lifespan_exits_when_connect_fails(self, tmp_path):
        from app.main import create_app, lifespan

        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'qa.db'}")
        app = create_app(database=db)

        with pytest.raises(SystemExit) as exc_info:
            async with lifespan(app):
                pass

        assert exc_info.value.code == 1
        await db.dispose()
