"""create templates, workouts, routes, exercises and progress tables

Revision ID: 3e1f0c9b7a52
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1f0c9b7a52'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'exercise_templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('last_used_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_exercise_templates_id', 'exercise_templates', ['id'])

    op.create_table(
        'routes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('distance_km', sa.Float(), nullable=False),
        sa.Column('points_count', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_routes_id', 'routes', ['id'])

    op.create_table(
        'route_points',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('route_id', sa.Integer(), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('elevation', sa.Float(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['route_id'], ['routes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('route_id', 'sequence', name='uq_route_points_sequence'),
    )
    op.create_index('ix_route_points_id', 'route_points', ['id'])
    op.create_index('ix_route_points_route_id', 'route_points', ['route_id'])

    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('distance_km', sa.Float(), nullable=True),
        sa.Column('duration_seconds', sa.Integer(), nullable=True),
        sa.Column('route_id', sa.Integer(), nullable=True),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('finalized', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['route_id'], ['routes.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['template_id'], ['exercise_templates.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_workouts_id', 'workouts', ['id'])

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['template_id'], ['exercise_templates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_exercises_id', 'exercises', ['id'])
    op.create_index('ix_exercises_workout_id', 'exercises', ['workout_id'])
    op.create_index('ix_exercises_template_id', 'exercises', ['template_id'])

    op.create_table(
        'exercise_sets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_exercise_sets_id', 'exercise_sets', ['id'])
    op.create_index('ix_exercise_sets_exercise_id', 'exercise_sets', ['exercise_id'])

    op.create_table(
        'progress_metrics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('kind', sa.String(length=32), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('workout_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['template_id'], ['exercise_templates.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_progress_metrics_id', 'progress_metrics', ['id'])
    op.create_index('ix_progress_metrics_template_id', 'progress_metrics', ['template_id'])
    op.create_index('ix_progress_metrics_kind', 'progress_metrics', ['kind'])

    op.create_table(
        'strength_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('max_weight', sa.Float(), nullable=False),
        sa.Column('max_reps', sa.Integer(), nullable=False),
        sa.Column('total_volume', sa.Float(), nullable=False),
        sa.Column('average_weight', sa.Float(), nullable=False),
        sa.Column('one_rep_max', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['template_id'], ['exercise_templates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_strength_progress_id', 'strength_progress', ['id'])
    op.create_index('ix_strength_progress_exercise_id', 'strength_progress', ['exercise_id'])
    op.create_index('ix_strength_progress_template_id', 'strength_progress', ['template_id'])

    op.create_table(
        'cardio_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_id', sa.Integer(), nullable=False),
        sa.Column('route_id', sa.Integer(), nullable=True),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('distance_km', sa.Float(), nullable=False),
        sa.Column('duration_seconds', sa.Integer(), nullable=False),
        sa.Column('average_pace', sa.Float(), nullable=False),
        sa.Column('best_pace', sa.Float(), nullable=True),
        sa.Column('elevation_gain_m', sa.Float(), nullable=True),
        sa.Column('elevation_loss_m', sa.Float(), nullable=True),
        sa.Column('splits', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['route_id'], ['routes.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['template_id'], ['exercise_templates.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cardio_progress_id', 'cardio_progress', ['id'])
    op.create_index('ix_cardio_progress_workout_id', 'cardio_progress', ['workout_id'])


def downgrade() -> None:
    op.drop_table('cardio_progress')
    op.drop_table('strength_progress')
    op.drop_table('progress_metrics')
    op.drop_table('exercise_sets')
    op.drop_table('exercises')
    op.drop_table('workouts')
    op.drop_table('route_points')
    op.drop_table('routes')
    op.drop_table('exercise_templates')
