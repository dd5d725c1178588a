"""Navigation tree core: tree construction, pruning and markup."""
