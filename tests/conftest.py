"""Pytest 配置"""

from unittest.mock import MagicMock

import pytest

from bootkernel.kernel.interface import Locator


@pytest.fixture
def inner_locator():
    """被包装的 mock 容器"""
    return MagicMock(spec=Locator)
