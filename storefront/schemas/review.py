# storefront/schemas/review.py
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    product_id: str = Field(..., alias="productId")
    reviewer_name: str = Field(..., alias="reviewerName")
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    images: List[str] = Field(default_factory=list)
    created_at: Optional[str] = Field(None, alias="createdAt")


class ReviewStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_reviews: int = Field(0, alias="totalReviews")
    rating_counts: Dict[int, int] = Field(default_factory=dict, alias="ratingCounts")
    average_rating: float = Field(0.0, alias="averageRating")
