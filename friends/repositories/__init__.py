"""Friends repositories."""
from .friend_repository import FriendRepository

__all__ = ["FriendRepository"]
