"""
Entry point for the layout extractor.
"""
from .cli import main

if __name__ == "__main__":
    main()
