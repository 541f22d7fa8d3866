"""create bands, seasons and setlists

Revision ID: 0002_create_band_tables
Revises: 0001_create_school_tables
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0002_create_band_tables'
down_revision = '0001_create_school_tables'
branch_labels = None
depends_on = None

def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]

def upgrade() -> None:
    op.create_table('bands',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('age_group', sa.String(length=50), nullable=True),
        sa.Column('schedule', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bands_name'), 'bands', ['name'])

    op.create_table('seasons',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('setlists',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('theme', sa.String(length=200), nullable=False),
        sa.Column('band_id', sa.String(length=36), nullable=False),
        sa.Column('season_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['band_id'], ['bands.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['season_id'], ['seasons.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_setlists_band_id'), 'setlists', ['band_id'])
    op.create_index(op.f('ix_setlists_season_id'), 'setlists', ['season_id'])
    op.create_index('idx_setlist_band_season', 'setlists', ['band_id', 'season_id'])

    op.create_table('band_students',
        sa.Column('band_id', sa.String(length=36), nullable=False),
        sa.Column('student_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['band_id'], ['bands.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('band_id', 'student_id')
    )

    op.create_table('band_teachers',
        sa.Column('band_id', sa.String(length=36), nullable=False),
        sa.Column('teacher_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['band_id'], ['bands.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['teacher_id'], ['teachers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('band_id', 'teacher_id')
    )

    op.create_table('setlist_songs',
        sa.Column('setlist_id', sa.String(length=36), nullable=False),
        sa.Column('song_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['setlist_id'], ['setlists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['song_id'], ['songs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('setlist_id', 'song_id')
    )

def downgrade() -> None:
    op.drop_table('setlist_songs')
    op.drop_table('band_teachers')
    op.drop_table('band_students')
    op.drop_table('setlists')
    op.drop_table('seasons')
    op.drop_table('bands')
