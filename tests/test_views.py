from HexFlashQ import crumb_html
from hexflash.chat_dock import chat_title, format_answer
from hexflash.selection_bus import SelectionBus


def test_answer_text_is_escaped():
    text = format_answer(["<b>DNA</b>"], "a < b?", "<script>x</script> & more")
    assert "<script>" not in text
    assert "&lt;script&gt;x&lt;/script&gt; &amp; more" in text
    assert "&lt;b&gt;DNA&lt;/b&gt;" in text
    assert "a &lt; b?" in text
    assert text.startswith("<b>About:</b>")


def test_current_breadcrumb_is_escaped():
    assert crumb_html("Cells & <i>tissues</i>") == "<b>Cells &amp; &lt;i&gt;tissues&lt;/i&gt;</b>"


def test_chat_title_names_topic():
    assert chat_title("en") == "Chat with Selected Cards"
    assert chat_title("en", "Photosynthesis") == "Chat with Selected Cards: Photosynthesis"


def test_topic_signal_reaches_listener():
    bus = SelectionBus()
    topics = []
    bus.topicChanged.connect(topics.append)
    bus.set_topic("Cells")
    bus.set_topic("")
    assert topics == ["Cells", ""]
