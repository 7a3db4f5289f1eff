"""Feedback schemas for API request/response models."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FeedbackSubmitRequest(BaseModel):
    """Request schema for reporting a bad translation."""

    original_query: str = Field(
        alias="originalQuery",
        min_length=1,
        description="The natural-language search the user typed",
    )
    translated_query: Optional[str] = Field(
        None,
        alias="translatedQuery",
        max_length=1000,
        description="The compiled query the user was served",
    )
    issue_description: str = Field(
        "",
        alias="issueDescription",
        description="What was wrong with the results",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "originalQuery": "mana rocks",
                "translatedQuery": 'o:"mana rocks"',
                "issueDescription": "Should find artifacts that tap for mana",
            }
        },
    )


class FeedbackResponse(BaseModel):
    """Response schema for a feedback item."""

    id: UUID = Field(description="Feedback unique identifier")
    original_query: str = Field(alias="originalQuery")
    translated_query: Optional[str] = Field(None, alias="translatedQuery")
    issue_description: str = Field(alias="issueDescription")
    status: str = Field(description="Processing status")
    generated_rule_id: Optional[UUID] = Field(None, alias="generatedRuleId")
    processing_message: Optional[str] = Field(None, alias="processingMessage")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    processed_at: Optional[datetime] = Field(None, alias="processedAt")

    model_config = ConfigDict(populate_by_name=True)


class ProcessFeedbackRequest(BaseModel):
    """Request schema for processing a single feedback item."""

    feedback_id: str = Field(
        alias="feedbackId",
        max_length=64,
        description="UUID of the feedback item to process",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"feedbackId": "550e8400-e29b-41d4-a716-446655440000"},
        },
    )


class FeedbackOutcomeResponse(BaseModel):
    """Response schema for a processed feedback item."""

    feedback_id: UUID = Field(alias="feedbackId")
    status: str = Field(description="Final processing status")
    message: str = Field(description="Short account of what happened")
    rule_id: Optional[UUID] = Field(None, alias="ruleId")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "feedbackId": "550e8400-e29b-41d4-a716-446655440000",
                "status": "completed",
                "message": "Created rule for 'mana rocks'",
                "ruleId": "660e8400-e29b-41d4-a716-446655440001",
            }
        },
    )
