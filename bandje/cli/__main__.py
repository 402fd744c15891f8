"""Allow ``python -m bandje.cli`` execution."""

from bandje.cli.dataset import main

main()
