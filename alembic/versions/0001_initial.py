"""initial schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('tickets',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('barCode', sa.String(), nullable=False),
    )

def downgrade():
    op.drop_table('tickets')
