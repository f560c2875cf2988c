"""Initial field operations schema

Revision ID: 7c2f4a9e1b30
Revises:
Create Date: 2026-10-19 09:12:04.118532

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB


# revision identifiers, used by Alembic.
revision: str = '7c2f4a9e1b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()'))


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        _id_column(),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('profile_image_url', sa.String(500), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    # Create time_cards table
    op.create_table(
        'time_cards',
        _id_column(),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('total_hours', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_time_cards_user_id', 'time_cards', ['user_id'])
    op.create_index('ix_time_cards_start_time', 'time_cards', ['start_time'])
    # At most one open card per user
    op.create_index(
        'uq_time_cards_one_active_per_user',
        'time_cards',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text('end_time IS NULL'),
    )

    # Create locations table
    op.create_table(
        'locations',
        _id_column(),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('lat', sa.Float(), nullable=False),
        sa.Column('lng', sa.Float(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_locations_user_id', 'locations', ['user_id'])
    op.create_index('ix_locations_timestamp', 'locations', ['timestamp'])

    # Create projects table
    op.create_table(
        'projects',
        _id_column(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_by', UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
    )

    op.create_table(
        'project_members',
        _id_column(),
        sa.Column('project_id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('project_id', 'user_id', name='uq_project_members_project_user'),
    )
    op.create_index('ix_project_members_project_id', 'project_members', ['project_id'])
    op.create_index('ix_project_members_user_id', 'project_members', ['user_id'])

    op.create_table(
        'project_messages',
        _id_column(),
        sa.Column('project_id', UUID(as_uuid=True), nullable=False),
        sa.Column('sender_id', UUID(as_uuid=True), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_project_messages_project_id', 'project_messages', ['project_id'])

    # Create boards table
    op.create_table(
        'boards',
        _id_column(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='group'),
        sa.Column('created_by', UUID(as_uuid=True), nullable=True),
        sa.Column('allow_user_editing', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
    )

    op.create_table(
        'board_members',
        _id_column(),
        sa.Column('board_id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('can_edit', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('joined_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('board_id', 'user_id', name='uq_board_members_board_user'),
    )
    op.create_index('ix_board_members_board_id', 'board_members', ['board_id'])
    op.create_index('ix_board_members_user_id', 'board_members', ['user_id'])

    # Create contacts table
    op.create_table(
        'contacts',
        _id_column(),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('company', sa.String(255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_contacts_created_by', 'contacts', ['created_by'])

    # Create photos table
    op.create_table(
        'photos',
        _id_column(),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('project_id', UUID(as_uuid=True), nullable=True),
        sa.Column('board_id', UUID(as_uuid=True), nullable=True),
        sa.Column('contact_id', UUID(as_uuid=True), nullable=True),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('storage_key', sa.String(500), nullable=True),
        sa.Column('file_type', sa.String(10), nullable=False, server_default='image'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('markup_data', JSONB(), nullable=True),
        sa.Column('is_locked', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_photos_user_id', 'photos', ['user_id'])
    op.create_index('ix_photos_project_id', 'photos', ['project_id'])
    op.create_index('ix_photos_board_id', 'photos', ['board_id'])
    op.create_index('ix_photos_contact_id', 'photos', ['contact_id'])

    # Create messages table
    op.create_table(
        'messages',
        _id_column(),
        sa.Column('sender_id', UUID(as_uuid=True), nullable=False),
        sa.Column('board_id', UUID(as_uuid=True), nullable=True),
        sa.Column('receiver_id', UUID(as_uuid=True), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('photo_id', UUID(as_uuid=True), nullable=True),
        sa.Column('is_locked', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['photo_id'], ['photos.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_board_id', 'messages', ['board_id'])
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'])


def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('photos')
    op.drop_table('contacts')
    op.drop_table('board_members')
    op.drop_table('boards')
    op.drop_table('project_messages')
    op.drop_table('project_members')
    op.drop_table('projects')
    op.drop_table('locations')
    op.drop_table('time_cards')
    op.drop_table('users')
