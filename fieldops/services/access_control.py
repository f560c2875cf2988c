"""
Access-control rules.

Every check is a pure function of the acting user's context and the
already-loaded entities involved, and returns a Decision. Services call
``ensure`` to turn a denial into a Forbidden error, so each rule has a
single implementation no matter which endpoint consumes it.
"""

import enum
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fieldops.exceptions import Forbidden
from fieldops.models.board import Board, BoardMember
from fieldops.models.contact import Contact
from fieldops.models.message import Message
from fieldops.models.photo import Photo
from fieldops.models.user import UserRole


@dataclass(frozen=True)
class ActorContext:
    """Identity and role of the user performing an operation"""

    user_id: UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class DenyReason(str, enum.Enum):
    """Why an access-control check failed"""

    ADMIN_REQUIRED = "admin_required"
    NOT_A_MEMBER = "not_a_member"
    NOT_OWNER = "not_owner"
    PHOTO_LOCKED = "photo_locked"
    MESSAGE_LOCKED = "message_locked"
    LOCK_REQUIRES_ADMIN = "lock_requires_admin"
    BOARD_EDITING_DISABLED = "board_editing_disabled"
    MEMBER_CANNOT_EDIT = "member_cannot_edit"
    SELF_DELETE = "self_delete"


DENY_MESSAGES = {
    DenyReason.ADMIN_REQUIRED: "Admin access required",
    DenyReason.NOT_A_MEMBER: "Not a member of this board",
    DenyReason.NOT_OWNER: "Not authorized",
    DenyReason.PHOTO_LOCKED: "Photo is locked",
    DenyReason.MESSAGE_LOCKED: "Message is locked",
    DenyReason.LOCK_REQUIRES_ADMIN: "Only admins can lock or unlock",
    DenyReason.BOARD_EDITING_DISABLED: "Not authorized to edit this photo",
    DenyReason.MEMBER_CANNOT_EDIT: "Not authorized to edit this photo",
    DenyReason.SELF_DELETE: "Cannot delete yourself",
}


@dataclass(frozen=True)
class Decision:
    """Outcome of an access-control check"""

    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


ALLOW = Decision.allow()


def ensure(decision: Decision, detail: Optional[str] = None) -> None:
    """Raise Forbidden when the decision is a denial"""
    if decision.allowed:
        return
    raise Forbidden(
        detail or DENY_MESSAGES.get(decision.reason, "Forbidden"),
        reason=decision.reason.value if decision.reason else None,
    )


def require_admin(actor: ActorContext) -> Decision:
    if actor.is_admin:
        return ALLOW
    return Decision.deny(DenyReason.ADMIN_REQUIRED)


def can_access_board(actor: ActorContext, membership: Optional[BoardMember]) -> Decision:
    """Read or post on a board: admins always, everyone else only as members"""
    if actor.is_admin or membership is not None:
        return ALLOW
    return Decision.deny(DenyReason.NOT_A_MEMBER)


def can_access_project_chat(actor: ActorContext, is_member: bool) -> Decision:
    if actor.is_admin or is_member:
        return ALLOW
    return Decision.deny(DenyReason.NOT_A_MEMBER)


def can_edit_photo(
    actor: ActorContext,
    photo: Photo,
    board: Optional[Board] = None,
    membership: Optional[BoardMember] = None,
    changes_lock: bool = False,
) -> Decision:
    """
    Decide whether the actor may edit a photo's notes and markup.

    Checks run in order and the first match wins:
      1. admins may always edit, including the lock flag
      2. the uploader may edit unless the photo is locked
      3. on a board, members may edit when the board allows user editing
         and their membership grants can_edit
    A locked photo blocks every non-admin edit, and only admins may change
    the lock flag.

    Args:
        actor: Acting user
        photo: Photo being edited
        board: Board the photo belongs to, if any
        membership: Actor's membership on that board, if any
        changes_lock: Whether the edit changes is_locked

    Returns:
        Decision
    """
    if actor.is_admin:
        return ALLOW

    if changes_lock:
        return Decision.deny(DenyReason.LOCK_REQUIRES_ADMIN)

    if photo.is_locked:
        return Decision.deny(DenyReason.PHOTO_LOCKED)

    if photo.user_id == actor.user_id:
        return ALLOW

    if photo.board_id is not None and board is not None:
        if not board.allow_user_editing:
            return Decision.deny(DenyReason.BOARD_EDITING_DISABLED)
        if membership is not None and membership.can_edit:
            return ALLOW
        return Decision.deny(DenyReason.MEMBER_CANNOT_EDIT)

    return Decision.deny(DenyReason.NOT_OWNER)


def can_delete_photo(actor: ActorContext, photo: Photo) -> Decision:
    if actor.is_admin or photo.user_id == actor.user_id:
        return ALLOW
    return Decision.deny(DenyReason.NOT_OWNER)


def can_modify_contact(actor: ActorContext, contact: Contact) -> Decision:
    if actor.is_admin or contact.created_by == actor.user_id:
        return ALLOW
    return Decision.deny(DenyReason.NOT_OWNER)


def can_delete_message(actor: ActorContext, message: Message) -> Decision:
    if actor.is_admin:
        return ALLOW
    if message.sender_id != actor.user_id:
        return Decision.deny(DenyReason.NOT_OWNER)
    if message.is_locked:
        return Decision.deny(DenyReason.MESSAGE_LOCKED)
    return ALLOW


def can_delete_user(actor: ActorContext, target_user_id: UUID) -> Decision:
    """Admins may delete other accounts, never their own"""
    if not actor.is_admin:
        return Decision.deny(DenyReason.ADMIN_REQUIRED)
    if target_user_id == actor.user_id:
        return Decision.deny(DenyReason.SELF_DELETE)
    return ALLOW
