"""init_reservation_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- screen / seat: physical layout of each cinema screen
- showtime: a movie on a screen between start_time and end_time, one price
- booking: reservation ledger, one row per booking
- seat_slot: per-showtime seat inventory, unique (seat_id, showtime_id)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # ========== Catalog ==========
    op.create_table(
        'screen',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('cinema_name', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id', name='pk_screen'),
        sa.UniqueConstraint('cinema_name', 'name', name='uq_screen_cinema_name'),
    )
    op.create_index('ix_screen_cinema_name', 'screen', ['cinema_name'])

    op.create_table(
        'seat',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('screen_id', sa.Uuid(), nullable=False),
        sa.Column('row_name', sa.String(length=1), nullable=False),
        sa.Column('seat_position', sa.Integer(), nullable=False),
        sa.Column('seat_type', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_seat'),
        sa.ForeignKeyConstraint(
            ['screen_id'], ['screen.id'], name='fk_seat_screen_id_screen', ondelete='CASCADE'
        ),
        sa.UniqueConstraint('screen_id', 'row_name', 'seat_position', name='uq_seat_screen_id'),
    )
    op.create_index('ix_seat_screen_id', 'seat', ['screen_id'])

    op.create_table(
        'showtime',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('movie_title', sa.String(length=255), nullable=False),
        sa.Column('screen_id', sa.Uuid(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id', name='pk_showtime'),
        sa.ForeignKeyConstraint(['screen_id'], ['screen.id'], name='fk_showtime_screen_id_screen'),
    )
    op.create_index('ix_showtime_screen_id', 'showtime', ['screen_id'])

    # ========== Reservation ==========
    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('seat_count', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_booking'),
    )
    op.create_index('ix_booking_user_id', 'booking', ['user_id'])
    op.create_index('ix_booking_showtime_id', 'booking', ['showtime_id'])
    op.create_index('ix_booking_status_expires_at', 'booking', ['status', 'expires_at'])

    op.create_table(
        'seat_slot',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('seat_id', sa.Uuid(), nullable=False),
        sa.Column('showtime_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=True),
        sa.Column('held_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_seat_slot'),
        sa.ForeignKeyConstraint(['seat_id'], ['seat.id'], name='fk_seat_slot_seat_id_seat'),
        sa.ForeignKeyConstraint(
            ['showtime_id'],
            ['showtime.id'],
            name='fk_seat_slot_showtime_id_showtime',
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['booking_id'], ['booking.id'], name='fk_seat_slot_booking_id_booking'
        ),
        sa.UniqueConstraint('seat_id', 'showtime_id', name='uq_seat_slot_seat_id'),
    )
    op.create_index('ix_seat_slot_showtime_id', 'seat_slot', ['showtime_id'])
    op.create_index('ix_seat_slot_booking_id', 'seat_slot', ['booking_id'])


def downgrade() -> None:
    op.drop_table('seat_slot')
    op.drop_table('booking')
    op.drop_table('showtime')
    op.drop_table('seat')
    op.drop_table('screen')
