"""
Direct message CRUD operations.

Dependencies: skillswap.boundary.db.models
System role: Direct message persistence
"""

from skillswap.boundary.db.models.direct_message_model import DirectMessageModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD


class DirectMessageCRUD(BaseCRUD[DirectMessageModel]):
    """CRUD operations for DirectMessageModel."""

    def __init__(self) -> None:
        """Initialize DirectMessageCRUD with DirectMessageModel."""
        super().__init__(DirectMessageModel)


direct_message_crud = DirectMessageCRUD()
