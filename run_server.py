# run_server.py
import uvicorn

from breakeven_report.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "api.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,         # True for local development
        loop="asyncio",
        http="h11",
        lifespan="on",        # owns the Chrome pool
        log_level=settings.LOG_LEVEL.lower(),
    )
