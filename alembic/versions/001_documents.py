"""Document store table

Revision ID: 001_documents
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_documents'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('collection', sa.String(length=64), nullable=False),
        sa.Column('doc_key', sa.String(length=512), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('collection', 'doc_key', name='uq_documents_collection_key'),
    )
    op.create_index('idx_documents_collection', 'documents', ['collection'])


def downgrade() -> None:
    op.drop_index('idx_documents_collection', table_name='documents')
    op.drop_table('documents')
