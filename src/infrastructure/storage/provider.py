"""Avatar storage protocol."""

from typing import Protocol

from domain.entities.profile import AvatarUpload


class IAvatarStore(Protocol):
    """Protocol for the object store holding profile images."""

    async def upload(self, user_id: str, avatar: AvatarUpload) -> str:
        """
        Store an avatar image.

        Args:
            user_id: Owner of the avatar, used in the object key
            avatar: File name, content type and raw bytes

        Returns:
            Public URL of the stored object

        Raises:
            AvatarStorageError: If the store rejects the upload
        """
        ...

    async def delete(self, url: str) -> None:
        """Delete the object behind a URL previously returned by ``upload``."""
        ...
