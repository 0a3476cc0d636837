# Serverless entrypoint: exposes the HerbaVerse ASGI app
import json
import logging

logger = logging.getLogger("herbaverse.api")

try:
    from herbaverse.main import app
except Exception:
    # Details stay in the platform logs; callers only see a generic failure
    logger.exception("HerbaVerse failed to start")

    STARTUP_ERROR_BODY = json.dumps({"error": "Service failed to start"}).encode("utf-8")

    async def app(scope, receive, send):
        if scope["type"] != "http":
            return
        await send({
            "type": "http.response.start",
            "status": 500,
            "headers": [[b"content-type", b"application/json"]],
        })
        await send({"type": "http.response.body", "body": STARTUP_ERROR_BODY})
