"""
Test suite for BaseCRUD generic database operations.

Tests basic CRUD functionality: create, read (by ID and all), update, delete, exists.
Runs against the in-memory SQLite session from conftest using the question table.

System role: Verification of generic database layer foundation
"""

import uuid
from typing import Any
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from mathprep.boundary.db.CRUD.base_crud import BaseCRUD
from mathprep.boundary.db.models import QuestionModel


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance bound to QuestionModel."""
    return BaseCRUD(QuestionModel)


def question_fields(**overrides: Any) -> dict[str, Any]:
    values = {
        "question_text": "Solve x + 1 = 3",
        "options": ["1", "2", "3"],
        "answer": "2",
        "division": "Algebra",
        "topic": "Linear Equations",
        "difficulty": 4,
    }
    values.update(overrides)
    return values


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    @pytest.mark.asyncio
    async def test_create_should_assign_id_and_timestamps(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        """Test create flushes so generated columns are populated."""
        # Act
        question = await base_crud.create(test_async_db, **question_fields())

        # Assert
        assert isinstance(question.id, uuid.UUID)
        assert question.created_at is not None
        assert question.options == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_create_should_flush_before_refresh(self, base_crud: BaseCRUD) -> None:
        """Test flush is called before refresh to ensure ID generation."""
        # Arrange
        call_order = []
        mock_session = AsyncMock(spec=AsyncSession)
        mock_session.flush = AsyncMock(side_effect=lambda: call_order.append("flush"))
        mock_session.refresh = AsyncMock(side_effect=lambda obj: call_order.append("refresh"))

        # Act
        await base_crud.create(mock_session, **question_fields())

        # Assert
        assert call_order == ["flush", "refresh"]
        mock_session.commit.assert_not_called()


class TestBaseCRUDRead:
    """Test suite for get_by_id() and get_all()."""

    @pytest.mark.asyncio
    async def test_get_by_id_should_return_model_when_found(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        created = await base_crud.create(test_async_db, **question_fields())

        # Act
        result = await base_crud.get_by_id(test_async_db, created.id)

        # Assert
        assert result is not None
        assert result.id == created.id

    @pytest.mark.asyncio
    async def test_get_by_id_should_return_none_when_not_found(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        assert await base_crud.get_by_id(test_async_db, uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_all_should_apply_limit_and_offset(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        """Test get_all respects pagination parameters."""
        # Arrange
        for i in range(5):
            await base_crud.create(test_async_db, **question_fields(question_text=f"Q{i}"))

        # Act
        everything = await base_crud.get_all(test_async_db)
        page = await base_crud.get_all(test_async_db, limit=2, offset=1)

        # Assert
        assert len(everything) == 5
        assert len(page) == 2


class TestBaseCRUDUpdateByID:
    """Test suite for BaseCRUD.update_by_id() method."""

    @pytest.mark.asyncio
    async def test_update_by_id_should_return_updated_model_when_found(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        created = await base_crud.create(test_async_db, **question_fields())

        # Act
        updated = await base_crud.update_by_id(test_async_db, created.id, difficulty=9, topic="Quadratics")

        # Assert
        assert updated is not None
        assert updated.difficulty == 9
        assert updated.topic == "Quadratics"

    @pytest.mark.asyncio
    async def test_update_by_id_should_return_none_when_not_found(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        assert await base_crud.update_by_id(test_async_db, uuid.uuid4(), difficulty=2) is None


class TestBaseCRUDDeleteAndExists:
    """Test suite for delete_by_id() and exists()."""

    @pytest.mark.asyncio
    async def test_delete_by_id_should_remove_row(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        # Arrange
        created = await base_crud.create(test_async_db, **question_fields())

        # Act
        deleted = await base_crud.delete_by_id(test_async_db, created.id)

        # Assert
        assert deleted is True
        assert await base_crud.exists(test_async_db, created.id) is False

    @pytest.mark.asyncio
    async def test_delete_by_id_should_return_false_when_not_found(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        assert await base_crud.delete_by_id(test_async_db, uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_exists_should_return_true_when_id_found(
        self, base_crud: BaseCRUD, test_async_db: AsyncSession
    ) -> None:
        created = await base_crud.create(test_async_db, **question_fields())

        assert await base_crud.exists(test_async_db, created.id) is True
