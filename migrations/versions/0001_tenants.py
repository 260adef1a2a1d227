"""tenants table: realm name, login theme, locale settings"""
from alembic import op
import sqlalchemy as sa

revision = '0001_tenants'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('display_name', sa.String(200), nullable=True),
        sa.Column('login_theme', sa.String(60), nullable=True),
        sa.Column('internationalization_enabled', sa.Boolean, nullable=False, server_default=sa.text('0')),
        sa.Column('supported_locales', sa.JSON, nullable=True),
        sa.Column('default_locale', sa.String(20), nullable=True),
        sa.Column('enabled', sa.Boolean, nullable=False, server_default=sa.text('1')),
        sa.UniqueConstraint('name', name='uq_tenants_name'),
    )


def downgrade():
    op.drop_table('tenants')
