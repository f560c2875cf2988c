"""Contact model"""

from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship
from fieldops.models.base import BaseModel


class Contact(BaseModel):
    """Customer or vendor contact, owned by the user who created it"""

    __tablename__ = "contacts"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    photos = relationship("Photo", back_populates="contact", passive_deletes=True)

    def __repr__(self):
        return f"<Contact(id={self.id}, first_name={self.first_name})>"
