from flow_debug.admin.routes import (
    DEBUG_WRITE,
    VIEW_DIR,
    create_admin_app,
    needs_permission,
    setup_routes,
)

__all__ = [
    'DEBUG_WRITE',
    'VIEW_DIR',
    'create_admin_app',
    'needs_permission',
    'setup_routes',
]
