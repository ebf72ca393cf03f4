"""001_baseline

Baseline migration for the container risk tracker schema:
users, containers, exceptions, notifications.

containers.updated_at is maintained by the application, not by a trigger:
risk and demurrage writes must leave it unchanged.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ------------------------------------------------------------------
    # Tables (dependency order)
    # ------------------------------------------------------------------

    # --- users ---
    op.execute("""
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            username VARCHAR(50) UNIQUE NOT NULL,
            email VARCHAR(255) UNIQUE NOT NULL,
            name VARCHAR(100) NOT NULL,
            role VARCHAR(30) NOT NULL DEFAULT 'User',
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute("CREATE INDEX ix_users_username ON users(username)")

    # --- containers ---
    op.execute("""
        CREATE TABLE containers (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            container_number VARCHAR(20) UNIQUE NOT NULL,
            container_type VARCHAR(10) NOT NULL DEFAULT '40HC',
            carrier VARCHAR(100),
            vessel_name VARCHAR(100),
            origin VARCHAR(100),
            destination VARCHAR(100),
            status VARCHAR(30) NOT NULL,
            eta VARCHAR(40),
            last_free_day VARCHAR(40),
            hold_types VARCHAR(50)[] NOT NULL DEFAULT '{}',
            terminal_status VARCHAR(50),
            risk_level VARCHAR(20),
            risk_reason TEXT,
            demurrage_fee NUMERIC(12, 2),
            daily_fee_rate NUMERIC(10, 2) DEFAULT 150.00,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute("CREATE INDEX ix_containers_container_number ON containers(container_number)")
    op.execute("CREATE INDEX ix_containers_status ON containers(status)")
    op.execute("CREATE INDEX ix_containers_risk_level ON containers(risk_level)")

    # --- exceptions ---
    op.execute("""
        CREATE TABLE exceptions (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            container_id UUID NOT NULL REFERENCES containers(id) ON DELETE CASCADE,
            category VARCHAR(20) NOT NULL DEFAULT 'manual',
            type VARCHAR(40) NOT NULL,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            timestamp VARCHAR(40) NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute("CREATE INDEX ix_exceptions_container_id ON exceptions(container_id)")
    op.execute("CREATE INDEX ix_exceptions_category ON exceptions(category)")

    # --- notifications ---
    op.execute("""
        CREATE TABLE notifications (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            user_id UUID REFERENCES users(id) ON DELETE CASCADE,
            type VARCHAR(30) NOT NULL,
            priority VARCHAR(10) NOT NULL DEFAULT 'normal',
            title TEXT NOT NULL,
            message TEXT NOT NULL,
            entity_type VARCHAR(20) DEFAULT 'CONTAINER',
            entity_id UUID,
            metadata JSONB,
            is_read BOOLEAN NOT NULL DEFAULT FALSE,
            read_at TIMESTAMP WITH TIME ZONE,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """)
    op.execute("CREATE INDEX ix_notifications_user_id ON notifications(user_id)")
    op.execute("CREATE INDEX ix_notifications_entity_id ON notifications(entity_id)")
    op.execute("CREATE INDEX ix_notifications_is_read ON notifications(is_read)")


def downgrade() -> None:
    # ------------------------------------------------------------------
    # Drop tables (reverse dependency order)
    # ------------------------------------------------------------------
    op.execute("DROP TABLE IF EXISTS notifications CASCADE")
    op.execute("DROP TABLE IF EXISTS exceptions CASCADE")
    op.execute("DROP TABLE IF EXISTS containers CASCADE")
    op.execute("DROP TABLE IF EXISTS users CASCADE")
