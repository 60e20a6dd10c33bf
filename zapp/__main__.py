"""Allow ``python -m zapp``."""

from zapp.main import main

main()
