"""enable RLS for owner isolation

Revision ID: 8b4e2d6f0a31
Revises: 3f1c9a2b7d10
Create Date: 2026-10-19 09:05:00.000000

Task rows are visible and writable only when user_id equals
current_setting('app.current_user_id'), or when that user's profile has role
Admin. Profiles are readable by their owner and by admins. The announcement is
readable by everyone and writable by admins. The application must SET LOCAL
app.current_user_id at the start of each transaction. Migrations and admin
scripts should use a DB role with BYPASSRLS; the app role must not.
"""

from typing import Sequence, Union

from alembic import op

revision: str = "8b4e2d6f0a31"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_CURRENT_USER = "current_setting('app.current_user_id', true)"


def upgrade() -> None:
    # SECURITY DEFINER so the role check is not itself filtered by profile RLS.
    op.execute(
        "CREATE OR REPLACE FUNCTION app_is_admin() RETURNS boolean "
        "LANGUAGE sql STABLE SECURITY DEFINER AS $$ "
        f"SELECT EXISTS (SELECT 1 FROM profile WHERE id = {_CURRENT_USER} "
        "AND role = 'Admin') $$"
    )

    op.execute("ALTER TABLE task ENABLE ROW LEVEL SECURITY")
    op.execute(
        "CREATE POLICY owner_isolation ON task "
        f"USING (user_id = {_CURRENT_USER} OR app_is_admin()) "
        f"WITH CHECK (user_id = {_CURRENT_USER} OR app_is_admin())"
    )

    op.execute("ALTER TABLE profile ENABLE ROW LEVEL SECURITY")
    op.execute(
        "CREATE POLICY profile_read ON profile FOR SELECT "
        f"USING (id = {_CURRENT_USER} OR app_is_admin())"
    )
    # Profiles are created by the auth backend at registration, before any
    # user context exists.
    op.execute("CREATE POLICY profile_insert ON profile FOR INSERT WITH CHECK (true)")

    op.execute("ALTER TABLE announcement ENABLE ROW LEVEL SECURITY")
    op.execute("CREATE POLICY announcement_read ON announcement FOR SELECT USING (true)")
    op.execute(
        "CREATE POLICY announcement_write ON announcement FOR ALL "
        "USING (app_is_admin()) WITH CHECK (app_is_admin())"
    )


def downgrade() -> None:
    op.execute("DROP POLICY IF EXISTS announcement_write ON announcement")
    op.execute("DROP POLICY IF EXISTS announcement_read ON announcement")
    op.execute("ALTER TABLE announcement DISABLE ROW LEVEL SECURITY")
    op.execute("DROP POLICY IF EXISTS profile_insert ON profile")
    op.execute("DROP POLICY IF EXISTS profile_read ON profile")
    op.execute("ALTER TABLE profile DISABLE ROW LEVEL SECURITY")
    op.execute("DROP POLICY IF EXISTS owner_isolation ON task")
    op.execute("ALTER TABLE task DISABLE ROW LEVEL SECURITY")
    op.execute("DROP FUNCTION IF EXISTS app_is_admin()")
