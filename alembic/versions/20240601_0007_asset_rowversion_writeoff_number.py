"""Assets.RowVersion and unique WriteOffNumber

Revision ID: 20240601_0007
Revises: 20240601_0006
Create Date: 2024-06-01 10:40:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_0007"
down_revision: Union[str, Sequence[str], None] = "20240601_0006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column("Assets", sa.Column("RowVersion", sa.LargeBinary(), nullable=True))
    op.create_index(
        "IX_WriteOffRecords_WriteOffNumber",
        "WriteOffRecords",
        ["WriteOffNumber"],
        unique=True,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("IX_WriteOffRecords_WriteOffNumber", table_name="WriteOffRecords")
    op.drop_column("Assets", "RowVersion")
