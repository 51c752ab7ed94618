from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel



class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class Post(CamelModel):
    id: str
    content: str
    url: Optional[str] = None
    timestamp: int

class FeedPublic(CamelModel):
    id: str
    name: str = ""
    about: str = ""
    created_at: int
    posts: List[Post] = Field(default_factory=list)

class FeedRecord(FeedPublic):
    """Everything persisted for one feed, written wholesale on each mutation."""
    write_key_hash: str
    last_post_at: int = 0

class FeedExport(FeedPublic):
    exported_at: int

class CreateFeedResponse(CamelModel):
    id: str
    write_key: str

class ProfilePatch(BaseModel):
    name: Optional[str] = None
    about: Optional[str] = None

class PostCreate(BaseModel):
    content: Optional[str] = None
    url: Optional[str] = None

class Ack(BaseModel):
    ok: bool = True
