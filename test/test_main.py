import pytest

import formedit
import formedit.__main__


class TestMain:
    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            formedit.__main__.main(["--version"])
        assert formedit.__version__ in capsys.readouterr().out

    def test_not_a_tty(self, monkeypatch, capsys):
        def run_editor(title, form, envelope):
            raise RuntimeError("formedit needs an interactive terminal")

        monkeypatch.setattr(formedit.__main__, "run_editor", run_editor)
        assert formedit.__main__.main([]) == 1
        assert "interactive terminal" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "ready,status", [(True, "Queued for sending."), (False, "Saved as a draft.")]
    )
    def test_output(self, monkeypatch, capsys, ready, status):
        seen = {}

        def run_editor(title, form, envelope):
            seen.update(title=title, form=form, to=list(envelope.to))
            form["subject"].value = "Hello"
            return ready

        monkeypatch.setattr(formedit.__main__, "run_editor", run_editor)
        code = formedit.__main__.main(
            ["--id", "xnd-101p", "--to", "XSCEOC", "--to", "XNDEOC"]
        )
        assert code == 0
        assert seen["title"] is None
        assert seen["to"] == ["XSCEOC", "XNDEOC"]
        assert seen["form"]["origin_message_number"].value == "XND-101P"

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "To: XSCEOC, XNDEOC"
        assert "Subject: Hello" in out
        assert out[-1] == status
