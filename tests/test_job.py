"""Tests for Job and JobContext."""

from ojs_statsd.job import Job, JobContext


class TestJob:
    def test_defaults(self) -> None:
        job = Job(id="j1", type="test")
        assert job.queue == "default"
        assert job.args == []
        assert job.meta == {}
        assert job.attempt == 0


class TestJobContext:
    def test_properties(self) -> None:
        job = Job(id="j1", type="email.send", queue="email", args=[1], meta={"k": "v"})
        ctx = JobContext(job=job, attempt=3)
        assert ctx.job_id == "j1"
        assert ctx.job_type == "email.send"
        assert ctx.queue == "email"
        assert ctx.args == [1]
        assert ctx.meta == {"k": "v"}
        assert ctx.attempt == 3
