"""Tests for console.py module."""

from unittest.mock import patch

from cdk_eks_fargate import console


class TestConsoleOutput:
    """Tests for console output functions."""

    def test_info_message(self):
        """Test info message format."""
        with patch.object(console.console, "print") as mock_print:
            console.info("Test message")
            mock_print.assert_called_once()
            call_arg = mock_print.call_args[0][0]
            assert "ℹ" in call_arg
            assert "Test message" in call_arg

    def test_success_message(self):
        """Test success message format."""
        with patch.object(console.console, "print") as mock_print:
            console.success("Stack synthesized")
            call_arg = mock_print.call_args[0][0]
            assert "✓" in call_arg
            assert "Stack synthesized" in call_arg

    def test_warning_message(self):
        """Test warning message format."""
        with patch.object(console.console, "print") as mock_print:
            console.warning("No load balancer yet")
            call_arg = mock_print.call_args[0][0]
            assert "⚠" in call_arg

    def test_error_message(self):
        """Test error message format."""
        with patch.object(console.console, "print") as mock_print:
            console.error("Something failed")
            call_arg = mock_print.call_args[0][0]
            assert "✗" in call_arg
            assert "Something failed" in call_arg

    def test_action_and_step_messages(self):
        """Test action and step prefixes."""
        with patch.object(console.console, "print") as mock_print:
            console.action("Doing something")
            console.step("Sub-step here")
            assert "→" in mock_print.call_args_list[0][0][0]
            assert "•" in mock_print.call_args_list[1][0][0]

    def test_highlight_returns_markup(self):
        """Test highlight returns Rich markup."""
        assert console.highlight("important") == "[highlight]important[/highlight]"

    def test_output_goes_to_stderr(self):
        """Test the shared console writes to stderr."""
        assert console.console.stderr is True


class TestConsoleSpinner:
    """Tests for spinner context manager."""

    def test_spinner_context_manager(self):
        """Test spinner works as context manager."""
        with patch.object(console.console, "status") as mock_status:
            mock_status.return_value.__enter__ = lambda x: None
            mock_status.return_value.__exit__ = lambda x, *args: None
            with console.spinner("Synthesizing..."):
                pass
            mock_status.assert_called_once()


class TestConsoleSummaryPanel:
    """Tests for summary panel."""

    def test_summary_panel(self):
        """Test summary panel renders."""
        with patch.object(console.console, "print") as mock_print:
            console.summary_panel("Stack Synthesized", {"Stack": "demo", "VPC": "(new VPC)"})
            mock_print.assert_called_once()

    def test_summary_panel_border_style(self):
        """Test the border style can be changed."""
        with patch.object(console.console, "print") as mock_print:
            console.summary_panel("Workload Status", {"Pods running": "1/2"}, border_style="yellow")
            assert mock_print.call_args[0][0].border_style == "yellow"
