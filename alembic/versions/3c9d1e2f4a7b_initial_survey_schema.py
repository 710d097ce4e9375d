"""initial_survey_schema

Revision ID: 3c9d1e2f4a7b
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9d1e2f4a7b"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "surveys",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_surveys_id", "surveys", ["id"])
    op.create_index("ix_surveys_created_by", "surveys", ["created_by"])

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("survey_id", sa.Integer(), sa.ForeignKey("surveys.id"), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("question_order", sa.Integer(), nullable=False),
    )
    op.create_index("ix_questions_id", "questions", ["id"])
    op.create_index("ix_questions_survey_id", "questions", ["survey_id"])

    op.create_table(
        "question_options",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "question_id",
            sa.Integer(),
            sa.ForeignKey("questions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("option_text", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_question_options_id", "question_options", ["id"])
    op.create_index("ix_question_options_question_id", "question_options", ["question_id"])

    op.create_table(
        "survey_tokens",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("survey_id", sa.Integer(), sa.ForeignKey("surveys.id"), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_survey_tokens_id", "survey_tokens", ["id"])
    op.create_index("ix_survey_tokens_token", "survey_tokens", ["token"], unique=True)
    op.create_index("ix_survey_tokens_survey_id", "survey_tokens", ["survey_id"])

    op.create_table(
        "survey_responses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("survey_id", sa.Integer(), sa.ForeignKey("surveys.id"), nullable=False),
        sa.Column("respondent_email", sa.String(length=255), nullable=False),
        sa.Column("submitted_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "survey_id", "respondent_email", name="uq_survey_responses_survey_email"
        ),
    )
    op.create_index("ix_survey_responses_id", "survey_responses", ["id"])
    op.create_index("ix_survey_responses_survey_id", "survey_responses", ["survey_id"])

    op.create_table(
        "answers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "survey_response_id",
            sa.Integer(),
            sa.ForeignKey("survey_responses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "question_id",
            sa.Integer(),
            sa.ForeignKey("questions.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("answer_text", sa.Text(), nullable=True),
        sa.Column("selected_options", sa.String(length=1024), nullable=True),
    )
    op.create_index("ix_answers_id", "answers", ["id"])
    op.create_index("ix_answers_survey_response_id", "answers", ["survey_response_id"])
    op.create_index("idx_answers_question", "answers", ["question_id"])


def downgrade() -> None:
    op.drop_table("answers")
    op.drop_table("survey_responses")
    op.drop_table("survey_tokens")
    op.drop_table("question_options")
    op.drop_table("questions")
    op.drop_table("surveys")
