"""Health check endpoints"""

from fastapi import APIRouter, Depends, status
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from botocore.exceptions import ClientError

from fieldops.config import settings
from fieldops.database import get_db
from fieldops.services.redis_service import RedisService
from fieldops.services.s3_service import S3Service

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"


@router.get("/health", status_code=status.HTTP_200_OK)
async def basic_health_check():
    """
    Basic health check endpoint (no authentication required)

    Returns simple health status and timestamp
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }


@router.get("/api/v1/health", status_code=status.HTTP_200_OK)
async def detailed_health_check(db: AsyncSession = Depends(get_db)):
    """
    Detailed health check with service dependency status (no authentication required)

    Checks connectivity to:
    - Database
    - Redis (sessions)
    - S3 (uploads)

    Returns overall status and individual service statuses
    """
    services = {}
    overall_status = "healthy"

    # Check database connectivity
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar_one()
        services["database"] = "connected"
    except Exception as e:
        services["database"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    # Check Redis connectivity
    try:
        client = await RedisService.get_client()
        await client.ping()
        services["redis"] = "connected"
    except Exception as e:
        services["redis"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    # Check S3 connectivity
    try:
        S3Service().check_bucket()
        services["s3"] = "connected"
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        if error_code == "404":
            services["s3"] = f"bucket_not_found: {settings.s3_bucket}"
        else:
            services["s3"] = f"disconnected: {error_code}"
        overall_status = "degraded"
    except Exception as e:
        services["s3"] = f"disconnected: {str(e)}"
        overall_status = "degraded"

    return {
        "status": overall_status,
        "version": API_VERSION,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "services": services
    }
