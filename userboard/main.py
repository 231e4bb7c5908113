from fastapi import FastAPI
from .config import server
from .core.events import lifespan
from .routes import index

# --- FastAPI App ---
app = FastAPI(
    title="Userboard",
    description="User profiles, badges and leaderboard rank backed by Redis",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(index.router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "userboard.main:app",
        host=server.HOST,
        port=server.PORT,
        log_level=server.LOG_LEVEL.lower()
    )
