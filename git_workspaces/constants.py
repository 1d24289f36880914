"""Shared constants for git-workspaces."""

# Naming
IMPL_BRANCH_SUFFIX = "/impl"
FALLBACK_DIR_NAME = "branch"
HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"


# Safety check warnings, in evaluation order
WARNING_UNCOMMITTED = "uncommitted changes"
WARNING_UNPUSHED = "unpushed commits"
WARNING_NOT_MERGED = "not merged to {remote}/{branch}"
WARNING_INVALID_REPOSITORY = "invalid git repository"

# Messages for checks that could not run
WARNING_CHECK_UNCOMMITTED_FAILED = "Could not check uncommitted changes: {error}"
WARNING_CHECK_UNPUSHED_FAILED = "Could not check unpushed commits: {error}"
WARNING_CHECK_MERGED_FAILED = "Could not check merge status: {error}"
WARNING_DIRECTORY_ACCESS = "Could not access directory: {error}"
WARNING_EVALUATION_FAILED = "Could not evaluate workspace: {error}"

# Signatures git prints when a directory is not a usable repository
INVALID_REPOSITORY_EXIT_CODE = 128
INVALID_REPOSITORY_MARKERS = (
    "not a git repository",
    "not a work tree",
)


# Environment file discovery
ENV_FILE_PREFIX = ".env"
ENV_SKIP_DIRS = frozenset({".git", "node_modules", "vendor", "dist", "build"})
ENV_FILE_MODE = 0o600


# Symbol constants
SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "⚠"
SYMBOL_BULLET = "•"
SYMBOL_CURRENT = "*"
