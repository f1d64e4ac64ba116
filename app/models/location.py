"""
Saved location database model.

A location is a place name a user wants current weather for. Rows are
created and deleted by their owner only.
"""

from sqlalchemy import Column, String, Integer, ForeignKey

from app.models.base import BaseModel


class Location(BaseModel):
    """Location name saved by a user."""

    __tablename__ = "locations"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user"
    )

    name = Column(
        String(200),
        nullable=False,
        comment="Location name as entered by the user (e.g. 'Paris')"
    )

    def __repr__(self):
        return f"<Location(name='{self.name}', user_id={self.user_id})>"
