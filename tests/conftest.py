import pytest

@pytest.fixture
def results_dir(tmp_path):
    directory = tmp_path / 'results'
    directory.mkdir()
    return directory

@pytest.fixture
def sample_results():
    return {
        'system': {'os': 'Linux'},
        'n': 20,
        'tests': [
            {'run': 1, 'n': 20, 'result': 6765, 'durationSec': 0.010, 'timestamp': '2026-01-01T10:00:00'},
            {'run': 2, 'n': 20, 'result': 6765, 'durationSec': 0.012, 'timestamp': '2026-01-01T10:00:01'},
            {'run': 3, 'n': 20, 'result': 6765, 'durationSec': 0.014, 'timestamp': '2026-01-01T10:00:02'},
        ]
    }
