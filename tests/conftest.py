import pytest

from rds.config import Settings
from rdstail.cli import create_parser


@pytest.fixture
def make_args():
    def make(*argv: str):
        return create_parser().parse_args(list(argv))

    return make


@pytest.fixture
def settings() -> Settings:
    return Settings(interval=0.0, max_portions=50)
