from .base_service import BaseService
from .comment_store import CommentStore
from .comment_validator import CommentValidator
from .comment_service import CommentService
from .feed_service import FeedAssembler
from .profile_service import ProfileService
from .band_service import BandService

__all__ = [
    "BaseService",
    "CommentStore",
    "CommentValidator",
    "CommentService",
    "FeedAssembler",
    "ProfileService",
    "BandService",
]
