from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from healthhub.database.connection import db_queries, get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    database_ok = await db_queries.ping(db)
    return {
        "status": "ok" if database_ok else "degraded",
        "database": database_ok
    }
