from tests.fixtures.aws import *  # noqa: F401,F403
from tests.fixtures.settings import *  # noqa: F401,F403
