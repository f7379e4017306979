"""Language front end: errors, sessions and the interactive shell."""
