"""Entry point: python -m db_health_gate evaluate REPORT [options]"""

from .cli.app import run

if __name__ == "__main__":
    run()
