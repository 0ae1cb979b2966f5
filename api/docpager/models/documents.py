"""Pydantic models for document pages."""

from typing import Optional, Dict, Any, List

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field, ConfigDict


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Make a MongoDB document JSON-friendly (ObjectId as hex, datetimes as ISO-8601)."""
    return jsonable_encoder(document, custom_encoder={ObjectId: str})


def identifier_to_str(identifier: Any) -> Optional[str]:
    """String form of an identifier, as accepted back by ``after_id``."""
    if identifier is None:
        return None
    return str(identifier)


class DocumentPage(BaseModel):
    """One page of documents with the cursor needed to fetch the next one."""

    documents: List[Dict[str, Any]] = Field(description="Documents sorted ascending by identifier")
    count: int = Field(ge=0, description="Number of documents in this page")
    limit: int = Field(ge=1, description="Requested page size")
    last_id: Optional[str] = Field(default=None, description="Identifier of the last document, pass as after_id for the next page")
    has_more: bool = Field(description="False once a page is shorter than the limit")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "documents": [
                    {"_id": "573a1390f29313caabcd4135", "title": "Blacksmith Scene", "year": 1893}
                ],
                "count": 1,
                "limit": 10,
                "last_id": "573a1390f29313caabcd4135",
                "has_more": False
            }
        }
    )

    @classmethod
    def from_documents(
        cls,
        documents: List[Dict[str, Any]],
        limit: int,
        identifier_field: str = "_id"
    ) -> "DocumentPage":
        """Build a page envelope from raw store documents."""
        last_id = identifier_to_str(documents[-1][identifier_field]) if documents else None
        return cls(
            documents=[serialize_document(doc) for doc in documents],
            count=len(documents),
            limit=limit,
            last_id=last_id,
            has_more=len(documents) == limit
        )
