from pydantic import BaseModel, Field

from src.domain.slug import SLUG_PATTERN


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class RangeRule(BaseModel):
    min: int = 1
    max: int

class RegexRule(BaseModel):
    pattern: str = SLUG_PATTERN

class ContentRules(BaseModel):
    title: RangeRule
    excerpt: RangeRule
    slug: RegexRule = Field(default_factory=RegexRule)
    default_category: str = "general"
    categories: list[str] = Field(default_factory=list)

class UploadsRules(BaseModel):
    max_upload_bytes: int
    allowlist_mime_types: list[str]

class AuthRules(BaseModel):
    token_ttl_minutes: int = 60 * 24

class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)

class Rules(BaseModel):
    project: ProjectRules
    content: ContentRules
    uploads: UploadsRules
    auth: AuthRules = Field(default_factory=AuthRules)
    ops: OpsRules = Field(default_factory=OpsRules)
