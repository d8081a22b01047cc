from gatewarden.study import strip_html


def test_drops_scripts_styles_and_tags() -> None:
    markup = """
    <html><head><style>body { color: red; }</style>
    <script type="text/javascript">alert("x")</script></head>
    <body><h1>Title</h1><p>First&nbsp;paragraph &amp; more.</p></body></html>
    """

    assert strip_html(markup) == "Title First paragraph & more."


def test_multiline_script_is_removed() -> None:
    assert strip_html("a<SCRIPT>\nvar x = 1;\n</SCRIPT>b") == "a b"


def test_angle_bracket_inside_attribute_is_not_text() -> None:
    assert strip_html('<a title="x>y" href="/n">news</a>') == "news"


def test_comments_and_noscript_are_dropped() -> None:
    markup = "<p>kept</p><!-- <p>hidden</p> --><noscript>enable js</noscript>"

    assert strip_html(markup) == "kept"


def test_plain_text_passes_through() -> None:
    assert strip_html("  just   text\n") == "just text"
