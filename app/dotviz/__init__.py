"""dotviz - visualize what a chezmoi dotfiles repository deploys.

Resolves which files a dotfiles repository deploys for a platform and
module selection, and simulates the effect of toggling modules.
"""

__version__ = "0.1.0"
