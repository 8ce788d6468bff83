# Routes package init
"""
PartCat Backend — API Routes Package
======================================

Route Inventory:
    - health.py:      GET  /                      (plain-text liveness)
                      GET  /health                (JSON health report)
    - users.py:       GET  /user/list
                      GET  /user/{id}
                      DELETE /user/{id}
                      POST /user/new
    - components.py:  GET  /component/list
                      GET|PUT|DELETE /component/{id}
                      POST /component/new
    - images.py:      GET  /image/list
                      GET|DELETE /image/{id}
                      GET  /image/{id}/file
                      POST /image/new
    - guard.py:       require_auth dependency (Email/Password headers)

Everything except health.py sits behind require_auth.
"""
