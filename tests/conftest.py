import pytest


@pytest.fixture
def waypoints():
    return [
        {"latitude": 45.5017, "longitude": -73.5673},
        {"latitude": 45.5020, "longitude": -73.5680},
        {"latitude": 45.5031, "longitude": -73.5692},
    ]


@pytest.fixture
def waypoints_with_custom_keys():
    return [
        {"lat": 45.5017, "lng": -73.5673, "alt": 31},
        {"lat": 45.5020, "lng": -73.5680, "alt": 33},
    ]


@pytest.fixture
def waypoints_with_all_fields():
    return [
        {
            "latitude": 45.5017,
            "longitude": -73.5673,
            "elevation": 31,
            "time": "2015-07-20T23:30:49Z",
        },
        {
            "latitude": 45.5020,
            "longitude": -73.5680,
            "elevation": 33,
            "time": "2015-07-20T23:30:54Z",
        },
    ]
