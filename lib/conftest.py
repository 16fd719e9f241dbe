try:
    from typing import Dict, Any
except ImportError:
    pass

import pytest

from debcontrol.tests.sources import SAMPLE_CONTROL


@pytest.fixture(autouse=True)
def doctest_add_sample_control(doctest_namespace):
    # type: (Dict[str, Any]) -> None
    # Provide a custom namespace for doctests such that the examples in the
    # module documentation have some input to work on.  Use sparingly.
    # - For this to work, the doctests MUST NOT define the names listed here
    #   (as the assignment would overwrite the sample)
    doctest_namespace['SAMPLE_CONTROL'] = SAMPLE_CONTROL
