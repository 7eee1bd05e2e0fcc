"""add unique constraint results student course term

Revision ID: b81f4d0c9e35
Revises: 7c2e91b04a1d
Create Date: 2026-10-14 09:41:12.502377

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = 'b81f4d0c9e35'
down_revision: Union[str, Sequence[str], None] = '7c2e91b04a1d'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table("results", recreate="always") as batch_op:
        batch_op.create_unique_constraint(
            "uq_results_student_course_term",
            ["student_id", "course_id", "semester", "academic_year"],
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("results", recreate="always") as batch_op:
        batch_op.drop_constraint(
            "uq_results_student_course_term",
            type_="unique",
        )
