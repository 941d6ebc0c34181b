"""
Tests for JobService - job CRUD, owner-scoped listing and the bid counter.
"""

import pytest

from solosphere.domain.exceptions import Forbidden, NotFound


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_then_get(self, job_service, sample_job):
        job_id = await job_service.create(sample_job)

        job = await job_service.get(job_id)

        assert job["id"] == job_id
        assert job["job_title"] == sample_job["job_title"]
        assert job["buyer"]["email"] == "buyer@x.com"
        assert job["bid_count"] == 0

    @pytest.mark.asyncio
    async def test_create_ignores_client_bid_count(self, job_service, sample_job):
        job_id = await job_service.create({**sample_job, "bid_count": 42})

        job = await job_service.get(job_id)

        assert job["bid_count"] == 0

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, job_service):
        with pytest.raises(NotFound):
            await job_service.get("does-not-exist")

    @pytest.mark.asyncio
    async def test_list_all(self, job_service, sample_job):
        for i in range(3):
            await job_service.create({**sample_job, "job_title": f"Job {i}"})

        jobs = await job_service.list_all()

        assert [j["job_title"] for j in jobs] == ["Job 0", "Job 1", "Job 2"]


class TestOwnerListing:
    @pytest.mark.asyncio
    async def test_mismatched_caller_is_forbidden(self, job_service, sample_job):
        await job_service.create(sample_job)

        with pytest.raises(Forbidden):
            await job_service.list_by_owner_email("a@x.com", "b@x.com")

    @pytest.mark.asyncio
    async def test_owner_sees_exactly_their_jobs(self, job_service, sample_job):
        mine = await job_service.create({**sample_job, "buyer": {"email": "a@x.com"}})
        await job_service.create({**sample_job, "buyer": {"email": "c@x.com"}})
        await job_service.create({**sample_job, "buyer": {"email": "c@x.com"}})

        jobs = await job_service.list_by_owner_email("a@x.com", "a@x.com")

        assert [j["id"] for j in jobs] == [mine]


class TestReplace:
    @pytest.mark.asyncio
    async def test_replace_missing_id_creates_job(self, job_service, sample_job):
        result = await job_service.replace("new-job-id", sample_job)

        assert result.upserted_id == "new-job-id"
        job = await job_service.get("new-job-id")
        assert job["job_title"] == sample_job["job_title"]
        assert job["bid_count"] == 0

    @pytest.mark.asyncio
    async def test_replace_existing_keeps_bid_count(
        self, job_service, bid_service, sample_job, sample_bid
    ):
        await job_service.replace("posted", sample_job)
        await bid_service.submit(sample_bid("posted"))

        await job_service.replace("posted", sample_job)

        assert (await job_service.get("posted"))["bid_count"] == 1

    @pytest.mark.asyncio
    async def test_replace_overwrites_only_given_keys(self, job_service, sample_job):
        job_id = await job_service.create(sample_job)

        result = await job_service.replace(
            job_id, {"job_title": "Lead Python Developer", "max_price": 900}
        )

        assert result.matched_count == 1
        assert result.modified_count == 1
        job = await job_service.get(job_id)
        assert job["job_title"] == "Lead Python Developer"
        assert job["max_price"] == 900
        assert job["description"] == sample_job["description"]
        assert job["buyer"] == sample_job["buyer"]

    @pytest.mark.asyncio
    async def test_replace_never_writes_bid_count(self, job_service, sample_job):
        job_id = await job_service.create(sample_job)
        await job_service.increment_bid_count(job_id)

        await job_service.replace(job_id, {"bid_count": 0, "job_title": "Edited"})

        job = await job_service.get(job_id)
        assert job["bid_count"] == 1
        assert job["job_title"] == "Edited"


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_existing(self, job_service, sample_job):
        job_id = await job_service.create(sample_job)

        result = await job_service.delete(job_id)

        assert result.deleted_count == 1
        with pytest.raises(NotFound):
            await job_service.get(job_id)

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self, job_service):
        result = await job_service.delete("ghost")

        assert result.acknowledged is True
        assert result.deleted_count == 0
        with pytest.raises(NotFound):
            await job_service.get("ghost")


class TestIncrementBidCount:
    @pytest.mark.asyncio
    async def test_increment(self, job_service, sample_job):
        job_id = await job_service.create(sample_job)

        await job_service.increment_bid_count(job_id)
        await job_service.increment_bid_count(job_id)

        assert (await job_service.get(job_id))["bid_count"] == 2

    @pytest.mark.asyncio
    async def test_increment_upserted_job_starts_from_zero(self, job_service, sample_job):
        await job_service.replace("upserted", sample_job)

        await job_service.increment_bid_count("upserted")

        assert (await job_service.get("upserted"))["bid_count"] == 1

    @pytest.mark.asyncio
    async def test_increment_missing_job_is_ignored(self, job_service):
        result = await job_service.increment_bid_count("ghost")

        assert result.matched_count == 0
