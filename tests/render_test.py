from block_splitter.blocks import EMPTY_RESULT
from block_splitter.classifier import BlockCategory
from block_splitter.render import block_label, iter_rendered, render_blocks


def test_labels_follow_category(split_small) -> None:
    result = split_small("aaaaa\nbbbbb[&$]cc\nddddd")
    labels = [block_label(i, b) for i, b in enumerate(result.blocks, 1)]
    assert labels == [
        "Block 1 (5 chars)",
        "Block 2 (5 chars)",
        "Block 3 [marker] (5 chars)",
        "Block 4 [after marker] (1 chars)",
        "Block 5 [after marker] (5 chars)",
    ]


def test_render_includes_summary_and_contents(split_small) -> None:
    text = render_blocks(split_small("ab\ncd"))
    assert text == "5 characters, 1 blocks\n\nBlock 1 (5 chars)\nab\ncd"


def test_style_hook_receives_category(split_small) -> None:
    seen: list[BlockCategory] = []

    def style(label: str, category: BlockCategory) -> str:
        seen.append(category)
        return label.upper()

    lines = list(iter_rendered(split_small("x[&$]"), style))
    assert seen == [BlockCategory.MARKER_FIRST]
    assert "BLOCK 1 [MARKER] (5 CHARS)" in lines


def test_empty_result_renders_summary_only() -> None:
    assert render_blocks(EMPTY_RESULT) == "0 characters, 0 blocks"
