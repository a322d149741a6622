import pytest

from dataprops import DataPropsApp


@pytest.fixture()
def app():
    app = DataPropsApp("test")
    with app.as_current():
        yield app
    app.shutdown()


@pytest.fixture()
def repository(app):
    return app.property_repository
