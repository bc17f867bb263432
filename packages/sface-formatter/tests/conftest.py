import pytest
from sface_formatter.engine import FormatterEngine
from sface_formatter.expressions import PythonExpressionFormatter
from sface_formatter.models import FormatterConfig
from sface_formatter.render import Renderer


@pytest.fixture
def engine():
    engine = FormatterEngine(FormatterConfig())
    engine.add_default_phases()
    return engine


@pytest.fixture
def renderer():
    return Renderer(FormatterConfig(), PythonExpressionFormatter())
