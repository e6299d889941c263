from typing import Optional
from uuid import UUID

from fastapi import Header, HTTPException, status

from optistore.core.config import TENANT_HEADER
from optistore.models.company import Company


async def get_company_id(
    company_id: Optional[str] = Header(None, alias=TENANT_HEADER),
) -> UUID:
    """Resolves the tenant of the request; every service call is scoped by it."""
    if not company_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Company context required")

    try:
        company_uuid = UUID(company_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Company context required")

    company = await Company.filter(id=company_uuid).first()
    if not company or not company.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Company access denied")

    return company_uuid
