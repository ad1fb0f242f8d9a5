"""repoadmin - administer a directory of bare git repositories for cgit/gitweb."""
