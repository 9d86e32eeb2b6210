"""Product model shared by the catalogue and the search core."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, validator


class Product(BaseModel):
    """A catalogue product. Only title and description are searched."""

    id: Optional[str] = Field(None, description="Product identifier")
    title: str = Field(default="", description="Product title")
    description: str = Field(default="", description="Product description")
    brand: Optional[str] = Field(None, description="Brand name")
    category: Optional[str] = Field(None, description="Enriched category")
    price_eur: Optional[float] = Field(None, description="Price in EUR")
    item_page_url: Optional[str] = Field(None, description="Product page URL")
    images_url: List[str] = Field(default_factory=list, description="Image URLs")
    attributes: Dict[str, str] = Field(default_factory=dict, description="Attribute values by name")
    confidence_score: float = Field(default=0.0, description="Secondary ranking signal")

    @validator('id', pre=True)
    def id_as_string(cls, v: Any) -> Optional[str]:
        """Accept numeric identifiers."""
        return None if v is None else str(v)

    @validator('title', 'description', pre=True, always=True)
    def empty_text_for_missing(cls, v: Any) -> str:
        """Coerce absent text fields to empty strings."""
        if v is None:
            return ""
        return str(v)

    @validator('confidence_score', pre=True, always=True)
    def zero_for_missing_confidence(cls, v: Any) -> float:
        """Treat an absent confidence score as zero."""
        return 0.0 if v is None else v

    @validator('images_url', pre=True, always=True)
    def drop_blank_images(cls, v: Any) -> List[str]:
        """Keep only non-blank image URLs."""
        if not v:
            return []
        return [url for url in v if url and str(url).strip()]

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Product":
        """
        Build a product from a raw dataset record.

        Accepts both the nested dataset shape (``original_data`` plus
        ``enriched_category`` and ``{"attr": {"value": ...}}`` attributes)
        and a flat dictionary of model fields.

        Args:
            record: Raw product record

        Returns:
            Product instance
        """
        original = record.get("original_data")
        if original is None:
            return cls(**record)

        attributes = {}
        for name, attribute in (record.get("attributes") or {}).items():
            value = attribute.get("value") if isinstance(attribute, dict) else attribute
            if value:
                attributes[name] = str(value)

        return cls(
            id=record.get("id"),
            title=original.get("title"),
            description=original.get("description"),
            brand=original.get("brand"),
            category=record.get("enriched_category"),
            price_eur=original.get("price_eur"),
            item_page_url=original.get("item_page_url"),
            images_url=original.get("images_url"),
            attributes=attributes,
            confidence_score=record.get("confidence_score"),
        )
