"""chat_message_seq

Revision ID: 8d42e6c0a915
Revises: 3f1c9a2b7d10
Create Date: 2026-10-18 09:41:07.552310

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d42e6c0a915'
down_revision: Union[str, None] = '3f1c9a2b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('chat_messages', sa.Column('seq', sa.Integer(), nullable=False, server_default='0'))
    # existing transcripts keep their created_at order
    op.execute(
        "UPDATE chat_messages SET seq = ("
        "SELECT COUNT(*) FROM chat_messages AS earlier "
        "WHERE earlier.session_id = chat_messages.session_id "
        "AND earlier.created_at <= chat_messages.created_at)"
    )


def downgrade() -> None:
    with op.batch_alter_table('chat_messages') as batch_op:
        batch_op.drop_column('seq')
