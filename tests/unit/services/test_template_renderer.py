from src.app.services.template_renderer import render, resolve_variables


def test_render_replaces_known_placeholders():
    text = "Hello {{ client_name }}, your total is {{amount}}."

    assert render(text, {"client_name": "Acme", "amount": 1200}) == (
        "Hello Acme, your total is 1200."
    )


def test_render_leaves_unknown_placeholders():
    assert render("{{known}} and {{unknown}}", {"known": "x"}) == "x and {{unknown}}"


def test_render_keeps_placeholder_for_none_value():
    assert render("Due {{date}}", {"date": None}) == "Due {{date}}"


def test_resolve_applies_defaults_then_supplied_values():
    definitions = [
        {"name": "timeline", "label": "Timeline", "default_value": "6 weeks"},
        {"name": "client_name", "label": "Client", "required": True},
    ]

    result = resolve_variables(definitions, {"client_name": "Acme", "extra": "kept"})

    assert result.is_ok()
    assert result.value == {"timeline": "6 weeks", "client_name": "Acme", "extra": "kept"}


def test_resolve_supplied_value_overrides_default():
    definitions = [{"name": "timeline", "label": "Timeline", "default_value": "6 weeks"}]

    result = resolve_variables(definitions, {"timeline": "2 weeks"})

    assert result.value == {"timeline": "2 weeks"}


def test_resolve_reports_every_missing_required_variable():
    definitions = [
        {"name": "client_name", "label": "Client", "required": True},
        {"name": "amount", "label": "Amount", "required": True},
        {"name": "notes", "label": "Notes"},
    ]

    result = resolve_variables(definitions, {"client_name": ""})

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert "client_name" in result.error.message
    assert "amount" in result.error.message
    assert "notes" not in result.error.message


def test_resolve_accepts_generator_of_definitions():
    definitions = ({"name": n, "label": n, "required": True} for n in ["a", "b"])

    result = resolve_variables(definitions, {"a": 1, "b": 2})

    assert result.value == {"a": 1, "b": 2}
