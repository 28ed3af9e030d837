"""
Main FastAPI application entry point.
"""
import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from customer_api.api import customers
from customer_api.db.database import engine, Base, settings
import customer_api.models  # noqa: F401  registers tables on Base

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Customer API",
    description="Create and update customer records",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(customers.router, prefix="/api/customers", tags=["customers"])


@app.get("/")
async def root():
    return {"message": "Customer API"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


def run():
    """Serve the API with uvicorn."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
