# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from tsoaclient.loader import ModuleLoader


@pytest.fixture
def loader() -> ModuleLoader:
	"""Fresh loader per test so parsed modules are never shared between tests."""
	return ModuleLoader()
