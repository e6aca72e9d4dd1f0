"""StatsD middleware example: time and count jobs run through a middleware chain.

Runs two jobs through an execution chain with the StatsD middleware
outermost. Watch the packets with::

    nc -ul 8125

Prerequisites:
    An OJS-compatible server running at http://localhost:8080 for the
    global queue gauges (or pass global_stats=False).
"""

import asyncio
import logging

from ojs_statsd import ExecutionMiddlewareChain, Job, JobContext, StatsdMiddleware

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


async def handle_email_send(ctx: JobContext):
    to = ctx.args[0]
    logging.info("Sending email to %s", to)
    await asyncio.sleep(0.1)
    return {"sent": True, "to": to}


async def handle_broken(ctx: JobContext):
    raise RuntimeError("template missing")


async def main() -> None:
    async with StatsdMiddleware(env="development", prefix="example") as statsd_mw:
        chain = ExecutionMiddlewareChain()
        chain.add(statsd_mw)

        ok = JobContext(job=Job(id="job-1", type="email.send", args=["user@example.com"]))
        result = await chain.execute(ok, handle_email_send)
        logging.info("Result: %s", result)

        broken = JobContext(job=Job(id="job-2", type="Mailer::Broken"))
        try:
            await chain.execute(broken, handle_broken)
        except RuntimeError as exc:
            logging.error("Job failed as expected: %s", exc)


if __name__ == "__main__":
    asyncio.run(main())
