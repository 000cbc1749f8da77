"""
Entry point for ``python -m formrelay``.
"""

from formrelay.main import run

if __name__ == "__main__":
    run()
