"""
Pydantic configuration schema for Messagr.

This module defines all configuration models with validation.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Search Configuration
# =============================================================================


class SearchConfig(BaseModel):
    """Caller-side defaults for advanced search filters."""

    model_config = ConfigDict(extra="allow")

    sort_by: str = "relevance"
    sort_direction: Literal["asc", "desc"] = "desc"
    limit: int = Field(default=50, ge=0)
    offset: int = Field(default=0, ge=0)


# =============================================================================
# Message Paging Configuration
# =============================================================================


class MessagesConfig(BaseModel):
    """Defaults for paginated message reads."""

    model_config = ConfigDict(extra="allow")

    page_size: int = Field(default=100, ge=0)
    offset: int = Field(default=0, ge=0)


# =============================================================================
# Presentation Configuration
# =============================================================================


class PresentationConfig(BaseModel):
    """Default ordering of the conversation list."""

    model_config = ConfigDict(extra="allow")

    sort_key: Literal["lastActivity", "name", "platform", "participants"] = "lastActivity"
    sort_direction: Literal["asc", "desc"] = "desc"


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for Messagr.

    Configuration can be loaded from YAML files and environment variables,
    merged in order of priority.
    """

    model_config = ConfigDict(extra="allow")

    search: SearchConfig = Field(default_factory=SearchConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    presentation: PresentationConfig = Field(default_factory=PresentationConfig)
