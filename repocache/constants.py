APP_NAME = "repocache"

# Cache layout
CACHE_CONF_FILE = "repos.conf"
CACHE_REPOS_DIR = "repos"

# Git
DEFAULT_GIT_PROGRAM = "git"

# Repository type tags used in persistent handles
GIT_REPO_TYPE = "git"
LOCAL_REPO_TYPE = "local"
