"""URI, path and JSON-with-comments primitives the workspaces core is built on."""
