"""Authentication: session tokens, verification codes and their delivery."""
