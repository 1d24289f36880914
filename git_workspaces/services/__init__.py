"""Services for git-workspaces."""
