"""Run the API with uvicorn: ``python -m inventory_api``."""
import uvicorn

from inventory_api.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "inventory_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
