"""RLCE API - rebuild documents from LLM line-range segment commands."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rlce.config import settings
from rlce.routes import reconstruction

# Initialize FastAPI app
app = FastAPI(
    title="RLCE API",
    description="Recursive line command extraction and document reconstruction",
    version=settings.app_version,
    debug=settings.debug,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for demo - restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reconstruction.router)


# --- Health Check ---

@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.app_version}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
