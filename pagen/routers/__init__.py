"""
Routers module - API endpoint handlers organized by feature.

- pages: submission, lazy generation (/gen/{id}) and the demo form
- admin: maintenance endpoints under /tmp-task (list, clear, import)
"""
