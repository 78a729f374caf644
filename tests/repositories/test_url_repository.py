"""Tests for the URL repository."""

import pytest
from sqlalchemy import select

from app.repositories.url_repository import URLRepository, DuplicateEntityError
from app.models.url import ShortURL, ShortURLCreate
from tests.utils import create_test_url, random_url


@pytest.mark.repository
class TestURLRepository:
    """Test suite for URL repository."""

    @pytest.fixture
    def url_repository(self):
        """Return URL repository instance."""
        return URLRepository()

    @pytest.mark.asyncio
    async def test_create_short_url(self, test_db, url_repository):
        """Test URL creation."""
        test_url = random_url()
        short_code = "tCreate1"

        url_data = ShortURLCreate(
            original_url=test_url,
            short_code=short_code,
            user_id=7
        )

        url = await url_repository.create_short_url(db=test_db, data=url_data)

        assert url.id is not None
        assert url.original_url == test_url
        assert url.short_code == short_code
        assert url.user_id == 7

        db_url = await url_repository.get_by_short_code(test_db, short_code)
        assert db_url is not None
        assert db_url.id == url.id

    @pytest.mark.asyncio
    async def test_create_from_dict(self, test_db, url_repository):
        """Plain dictionaries are accepted as creation data."""
        url = await url_repository.create_short_url(
            test_db,
            {"original_url": "https://example.com", "short_code": "dictCode", "user_id": 1}
        )
        assert url.short_code == "dictCode"

    @pytest.mark.asyncio
    async def test_create_duplicate_short_code(self, test_db, url_repository):
        """Test duplicate short code handling."""
        short_code = "dupCode1"
        await create_test_url(test_db, short_code=short_code)

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.create_short_url(
                db=test_db,
                data=ShortURLCreate(
                    original_url=random_url(),
                    short_code=short_code,
                    user_id=1
                )
            )

        assert excinfo.value.field_name == "short_code"
        assert excinfo.value.value == short_code

    @pytest.mark.asyncio
    async def test_unique_constraint_reports_duplicate(self, test_db, url_repository):
        """A code inserted after the pre-check still surfaces as a duplicate."""
        short_code = "raceCode"
        await create_test_url(test_db, short_code=short_code)

        async def code_looks_free(db, code):
            return False

        url_repository.check_short_code_exists = code_looks_free

        with pytest.raises(DuplicateEntityError):
            await url_repository.create_short_url(
                test_db,
                ShortURLCreate(original_url=random_url(), short_code=short_code, user_id=2)
            )

    @pytest.mark.asyncio
    async def test_get_by_short_code(self, test_db, url_repository):
        """Test URL retrieval by code."""
        test_url = await create_test_url(test_db, short_code="tGet1234", user_id=1)

        db_url = await url_repository.get_by_short_code(test_db, "tGet1234")

        assert db_url is not None
        assert db_url.id == test_url.id
        assert db_url.original_url == test_url.original_url

    @pytest.mark.asyncio
    async def test_get_by_short_code_nonexistent(self, test_db, url_repository):
        """Test retrieving nonexistent URL."""
        assert await url_repository.get_by_short_code(test_db, "nonexistent") is None

    @pytest.mark.asyncio
    async def test_short_code_lookup_is_case_sensitive(self, test_db, url_repository):
        """Codes differing only in case are different codes."""
        await create_test_url(test_db, short_code="AbCdEfGh")

        assert await url_repository.get_by_short_code(test_db, "abcdefgh") is None
        assert await url_repository.check_short_code_exists(test_db, "ABCDEFGH") is False

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_db, url_repository):
        """Test URL retrieval by id."""
        test_url = await create_test_url(test_db, user_id=1)

        assert (await url_repository.get_by_id(test_db, test_url.id)).short_code == test_url.short_code
        assert await url_repository.get_by_id(test_db, 9999) is None

    @pytest.mark.asyncio
    async def test_get_by_user_id(self, test_db, url_repository):
        """Only the user's URLs are returned, in insertion order."""
        first = await create_test_url(test_db, user_id=1)
        await create_test_url(test_db, user_id=2)
        second = await create_test_url(test_db, user_id=1)
        await create_test_url(test_db)

        urls = await url_repository.get_by_user_id(test_db, 1)

        assert [url.id for url in urls] == [first.id, second.id]
        assert await url_repository.get_by_user_id(test_db, 3) == []

    @pytest.mark.asyncio
    async def test_check_short_code_exists(self, test_db, url_repository):
        """Test short code existence check."""
        await create_test_url(test_db, short_code="exists12")

        assert await url_repository.check_short_code_exists(test_db, "exists12") is True
        assert await url_repository.check_short_code_exists(test_db, "nonexistent") is False

    @pytest.mark.asyncio
    async def test_delete(self, test_db, url_repository):
        """Deleted URLs are gone; deleting twice reports nothing deleted."""
        test_url = await create_test_url(test_db, short_code="delete12")
        await create_test_url(test_db, short_code="keep1234")

        assert await url_repository.delete(test_db, test_url.id) is True
        assert await url_repository.delete(test_db, test_url.id) is False

        result = await test_db.execute(select(ShortURL))
        remaining_codes = [url.short_code for url in result.scalars().all()]
        assert remaining_codes == ["keep1234"]
        assert await url_repository.count(test_db) == 1
