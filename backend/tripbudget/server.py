"""
Server entrypoint, installed as the `tripbudget-server` command.
"""
import uvicorn
from tripbudget.core.config import settings


def run():
    uvicorn.run(
        "tripbudget.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,  # Auto-reload only while developing
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
