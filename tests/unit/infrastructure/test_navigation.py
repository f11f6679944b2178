from tournament_client.infrastructure.navigation import SessionLoginRedirector


def test_remember_and_consume_path(test_settings):
    session = {}
    redirector = SessionLoginRedirector(current_path="/dashboard", session_storage=session, config=test_settings)

    redirector.remember_path("/dashboard/registrations")

    assert session == {"redirectAfterLogin": "/dashboard/registrations"}
    assert redirector.consume_remembered_path() == "/dashboard/registrations"
    assert redirector.consume_remembered_path() is None
    assert session == {}


def test_navigate_records_history_and_moves(test_settings):
    redirector = SessionLoginRedirector(current_path="/dashboard", config=test_settings)

    redirector.navigate("/auth/login")

    assert redirector.history == ["/auth/login"]
    assert redirector.current_path() == "/auth/login"


def test_set_current_path(test_settings):
    redirector = SessionLoginRedirector(config=test_settings)
    assert redirector.current_path() == "/"

    redirector.set_current_path("/clubs/3")

    assert redirector.current_path() == "/clubs/3"
    assert redirector.history == []
