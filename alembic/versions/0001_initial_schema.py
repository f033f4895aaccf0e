"""initial schema: users, category, blog, comment, reply

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
    )
    op.create_table(
        "category",
        sa.Column("idcategory", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("category_title", sa.String(100), nullable=False),
    )
    op.create_table(
        "blog",
        sa.Column("idblog", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("blog_title", sa.String(300), nullable=False),
        sa.Column("blog_detail", sa.Text(), nullable=False),
        sa.Column("blog_image", sa.String(500), nullable=True),
        sa.Column("blog_author", sa.String(255), nullable=False),
        sa.Column(
            "blog_datetime",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("blog_tag", sa.String(100), nullable=True),
        sa.Column("idcategory", sa.Integer(), sa.ForeignKey("category.idcategory"), nullable=True),
        sa.Column(
            "iduser",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_blog_blog_datetime", "blog", ["blog_datetime"])
    op.create_index("ix_blog_idcategory", "blog", ["idcategory"])
    op.create_index("ix_blog_iduser", "blog", ["iduser"])

    op.create_table(
        "comment",
        sa.Column("idcomment", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "idblog",
            sa.Integer(),
            sa.ForeignKey("blog.idblog", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("comment_name", sa.String(150), nullable=False),
        sa.Column("comment_email", sa.String(255), nullable=False),
        sa.Column("comment_website", sa.String(255), nullable=True),
        sa.Column("comment_msg", sa.Text(), nullable=False),
    )
    op.create_index("ix_comment_idblog", "comment", ["idblog"])

    op.create_table(
        "reply",
        sa.Column("idreply", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "idcomment",
            sa.Integer(),
            sa.ForeignKey("comment.idcomment", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reply_name", sa.String(150), nullable=False),
        sa.Column("reply_email", sa.String(255), nullable=False),
        sa.Column("reply_msg", sa.Text(), nullable=False),
    )
    op.create_index("ix_reply_idcomment", "reply", ["idcomment"])


def downgrade() -> None:
    op.drop_index("ix_reply_idcomment", table_name="reply")
    op.drop_table("reply")
    op.drop_index("ix_comment_idblog", table_name="comment")
    op.drop_table("comment")
    op.drop_index("ix_blog_iduser", table_name="blog")
    op.drop_index("ix_blog_idcategory", table_name="blog")
    op.drop_index("ix_blog_blog_datetime", table_name="blog")
    op.drop_table("blog")
    op.drop_table("category")
    op.drop_table("users")
