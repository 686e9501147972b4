"""initial_schema

Revision ID: a3f9c2e17b40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a3f9c2e17b40'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        'athletes',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('middle_initial', sa.String(length=1), nullable=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('employer', sa.String(length=100), nullable=True),
        sa.Column('shirt_gender', sa.String(length=20), nullable=True),
        sa.Column('shirt_size', sa.String(length=10), nullable=True),
        sa.Column('emergency_name', sa.String(length=100), nullable=True),
        sa.Column('emergency_phone', sa.String(length=30), nullable=True),
        sa.Column('legacy_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index('ix_athletes_email', 'athletes', ['email'])
    op.create_index('idx_athletes_name', 'athletes', ['last_name', 'first_name'])

    op.create_table(
        'hosts',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('admin_secret', sa.String(length=255), nullable=False),
        sa.Column('subject_id', sa.String(length=128), nullable=True),
        sa.Column('disclaimer', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_hosts_subject_id', 'hosts', ['subject_id'], unique=True)

    op.create_table(
        'activities',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=64), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        'locations',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('host_id', sa.String(length=32), sa.ForeignKey('hosts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=300), nullable=False, server_default=''),
        *_timestamps(),
    )
    op.create_index('idx_locations_host', 'locations', ['host_id'])

    op.create_table(
        'location_activities',
        sa.Column('location_id', sa.String(length=32), sa.ForeignKey('locations.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('activity_id', sa.String(length=32), sa.ForeignKey('activities.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'disclaimer_signatures',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('athlete_id', sa.String(length=32), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('host_id', sa.String(length=32), sa.ForeignKey('hosts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('signed_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('athlete_id', 'host_id', name='uq_disclaimer_athlete_host'),
    )

    op.create_table(
        'pets',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('athlete_id', sa.String(length=32), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('name_key', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('athlete_id', 'name_key', name='uq_pet_athlete_name'),
    )
    op.create_index('ix_pets_athlete_id', 'pets', ['athlete_id'])

    op.create_table(
        'checkins',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('athlete_id', sa.String(length=32), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('host_id', sa.String(length=32), sa.ForeignKey('hosts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location_id', sa.String(length=32), sa.ForeignKey('locations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('activity_id', sa.String(length=32), sa.ForeignKey('activities.id'), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('week_start', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('athlete_id', 'host_id', 'week_start', name='uq_checkin_athlete_host_week'),
    )
    op.create_index('idx_checkins_athlete_time', 'checkins', ['athlete_id', 'timestamp'])
    op.create_index('idx_checkins_host_time', 'checkins', ['host_id', 'timestamp'])

    op.create_table(
        'pet_checkins',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('athlete_id', sa.String(length=32), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('pet_id', sa.String(length=32), sa.ForeignKey('pets.id', ondelete='CASCADE'), nullable=False),
        sa.Column('host_id', sa.String(length=32), sa.ForeignKey('hosts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location_id', sa.String(length=32), sa.ForeignKey('locations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_pet_checkins_pet_time', 'pet_checkins', ['pet_id', 'timestamp'])
    op.create_index('idx_pet_checkins_host_time', 'pet_checkins', ['host_id', 'timestamp'])

    op.create_table(
        'rewards',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('required_count', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=64), nullable=False),
        sa.Column('reward_type', sa.String(length=10), nullable=False),
        sa.Column('host_id', sa.String(length=32), sa.ForeignKey('hosts.id', ondelete='CASCADE'), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('required_count > 0', name='ck_reward_positive_count'),
        sa.CheckConstraint(
            "(reward_type = 'host' AND host_id IS NOT NULL) OR "
            "(reward_type IN ('global', 'pet') AND host_id IS NULL)",
            name='ck_reward_host_scope',
        ),
    )
    op.create_index('idx_rewards_type', 'rewards', ['reward_type'])
    op.create_index('idx_rewards_host', 'rewards', ['host_id'])

    op.create_table(
        'reward_claims',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('athlete_id', sa.String(length=32), sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reward_id', sa.String(length=32), sa.ForeignKey('rewards.id', ondelete='CASCADE'), nullable=False),
        sa.Column('host_id', sa.String(length=32), sa.ForeignKey('hosts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location_id', sa.String(length=32), sa.ForeignKey('locations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('pet_id', sa.String(length=32), sa.ForeignKey('pets.id', ondelete='CASCADE'), nullable=True),
        sa.Column('claimant_id', sa.String(length=32), nullable=False),
        sa.Column('claimed_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('claimant_id', 'reward_id', name='uq_claim_claimant_reward'),
    )
    op.create_index('ix_reward_claims_athlete_id', 'reward_claims', ['athlete_id'])
    op.create_index('idx_reward_claims_host_time', 'reward_claims', ['host_id', 'claimed_at'])


def downgrade():
    op.drop_table('reward_claims')
    op.drop_table('rewards')
    op.drop_table('pet_checkins')
    op.drop_table('checkins')
    op.drop_table('pets')
    op.drop_table('disclaimer_signatures')
    op.drop_table('location_activities')
    op.drop_table('locations')
    op.drop_table('activities')
    op.drop_table('hosts')
    op.drop_table('athletes')
