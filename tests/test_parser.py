from mindmap.graph.parser import extract_relations, parse_relations


def test_parse_two_relations() -> None:
    graph = parse_relations("{toxic shame}(08){addictions}\n{self-worth}(06){relationships}")

    assert len(graph.nodes) == 4
    assert [e.weight for e in graph.edges] == [8, 6]
    assert [(e.source, e.target) for e in graph.edges] == [
        ("toxic shame", "addictions"),
        ("self-worth", "relationships"),
    ]


def test_garbage_lines_contribute_nothing() -> None:
    text = "{toxic shame}(08){addictions}\ngarbage text\n{self-worth}(06){relationships}"
    graph = parse_relations(text)

    assert len(graph.nodes) == 4
    assert len(graph.edges) == 2


def test_names_are_trimmed_and_shared_across_lines() -> None:
    graph = parse_relations("{ a }(1){b}\n{b}(2){  a}\n")
    assert list(graph.nodes) == ["a", "b"]
    assert len(graph.edges) == 2


def test_weight_must_be_one_or_two_digits() -> None:
    assert extract_relations("{a}(123){b}") == []
    assert extract_relations("{a}(){b}") == []
    assert extract_relations("{a}(7){b}") == [("a", "b", 7)]


def test_empty_text_gives_empty_graph() -> None:
    graph = parse_relations("\n   \n")
    assert len(graph.nodes) == 0
    assert graph.edges == []
