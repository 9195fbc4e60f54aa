"""Workspace file pipeline.

- **resolver**: Folder location -> stored folder entry (relative path, absolute path or uri)
- **codec**: Workspace file text -> stored folders -> workspace folders
- **rewriter**: Workspace file text -> same file saved at another location
"""
