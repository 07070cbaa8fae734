"""Integration tests for terminal endpoints."""


class TestPostTerminalExecute:
    """Tests for POST /terminal/execute endpoint."""

    def test_execute_pwd(self, client_with_workspace):
        """Test running pwd returns the home directory."""
        client, workspace = client_with_workspace

        response = client.post("/terminal/execute", json={"command": "pwd"})

        assert response.status_code == 200
        data = response.json()

        assert data["command"] == "pwd"
        assert data["output"] == "/home/user"
        assert data["status"] == "ok"
        assert data["cwd"] == "/home/user"
        assert data["transcript"] == "$ pwd\n/home/user\n$ "

    def test_unknown_command_is_not_http_error(self, client_with_workspace):
        """Test an unknown command is reported as terminal output."""
        client, _ = client_with_workspace

        response = client.post("/terminal/execute", json={"command": "rm -rf /"})

        assert response.status_code == 200
        data = response.json()
        assert data["output"] == "rm: command not found"
        assert data["args"] == ["-rf", "/"]
        assert data["status"] == "usage_error"

    def test_missing_file_status(self, client_with_workspace):
        client, _ = client_with_workspace

        response = client.post("/terminal/execute", json={"command": "cat nope.txt"})

        assert response.json()["status"] == "not_found"

    def test_mkdir_then_ls(self, client_with_workspace):
        """Test state persists across requests."""
        client, workspace = client_with_workspace

        client.post("/terminal/execute", json={"command": "mkdir src"})
        response = client.post("/terminal/execute", json={"command": "ls"})

        assert response.json()["output"] == "src"
        assert workspace.filesystem.list_entries("/home/user") == ["src"]

    def test_cd_changes_cwd(self, client_with_workspace):
        client, _ = client_with_workspace

        response = client.post("/terminal/execute", json={"command": "cd .."})

        assert response.json()["cwd"] == "/home"

    def test_clear_resets_transcript(self, client_with_workspace):
        client, _ = client_with_workspace

        client.post("/terminal/execute", json={"command": "help"})
        response = client.post("/terminal/execute", json={"command": "clear"})

        data = response.json()
        assert data["cleared"] is True
        assert data["transcript"] == "$ "

    def test_blank_command_rejected(self, client_with_workspace):
        """Test a blank command line fails validation."""
        client, workspace = client_with_workspace

        response = client.post("/terminal/execute", json={"command": "   "})

        assert response.status_code == 422
        assert workspace.session.history == ()

    def test_missing_command_field(self, client_with_workspace):
        client, _ = client_with_workspace

        response = client.post("/terminal/execute", json={})

        assert response.status_code == 422


class TestGetTerminalState:
    """Tests for GET /terminal/state endpoint."""

    def test_fresh_state(self, client_with_workspace):
        client, _ = client_with_workspace

        response = client.get("/terminal/state")

        assert response.status_code == 200
        assert response.json() == {
            "cwd": "/home/user",
            "transcript": "$ ",
            "history": [],
            "entries": [],
        }

    def test_state_reflects_commands(self, client_with_workspace):
        client, _ = client_with_workspace

        client.post("/terminal/execute", json={"command": "mkdir build"})
        client.post("/terminal/execute", json={"command": "clear"})

        data = client.get("/terminal/state").json()

        assert data["history"] == ["mkdir build", "clear"]
        assert data["entries"] == ["build"]
        assert data["transcript"] == "$ "
