from pothole_api.services.aggregator import round_one, summarize

from conftest import make_report


def test_empty_input_gives_empty_leaderboard():
    result = summarize([])
    assert result.leaderboard == []
    assert result.total_reports == 0
    assert result.total_districts == 0
    assert result.avg_danger_level == 0.0


def test_kochi_palakkad_scenario():
    reports = [
        make_report("a", 8, "Kochi"),
        make_report("b", 4, "Kochi"),
        make_report("c", 6, "Palakkad"),
    ]
    result = summarize(reports)

    assert [(d.district, d.count, d.avg_danger) for d in result.leaderboard] == [
        ("Kochi", 2, 6.0),
        ("Palakkad", 1, 6.0),
    ]
    assert result.total_reports == 3
    assert result.total_districts == 2
    assert result.avg_danger_level == 6.0


def test_counts_partition_the_input():
    reports = [make_report(str(i), (i % 10) + 1, f"D{i % 4}") for i in range(23)]
    result = summarize(reports)
    assert sum(d.count for d in result.leaderboard) == len(reports)
    assert result.total_districts == 4


def test_ranking_by_count_then_avg_danger():
    reports = [
        make_report("1", 2, "Thrissur"),
        make_report("2", 9, "Kannur"),
        make_report("3", 3, "Thrissur"),
        make_report("4", 7, "Kottayam"),
        make_report("5", 8, "Kottayam"),
        make_report("6", 1, "Idukki"),
    ]
    board = summarize(reports).leaderboard

    assert [d.district for d in board] == ["Kottayam", "Thrissur", "Kannur", "Idukki"]
    for a, b in zip(board, board[1:]):
        assert a.count > b.count or (a.count == b.count and a.avg_danger >= b.avg_danger)


def test_full_ties_keep_first_appearance_order():
    reports = [make_report("1", 5, "Beta"), make_report("2", 5, "Alpha"), make_report("3", 5, "Gamma")]
    assert [d.district for d in summarize(reports).leaderboard] == ["Beta", "Alpha", "Gamma"]


def test_blank_district_grouped_as_unknown():
    reports = [make_report("1", 4, ""), make_report("2", 6, "")]
    board = summarize(reports).leaderboard
    assert len(board) == 1
    assert board[0].district == "Unknown District"
    assert board[0].count == 2


def test_district_names_are_grouped_exactly():
    reports = [make_report("1", 4, "Kochi"), make_report("2", 6, "Kochi ")]
    result = summarize(reports)
    assert result.total_districts == 2
    assert sorted(d.district for d in result.leaderboard) == ["Kochi", "Kochi "]


def test_unrated_report_counts_but_adds_no_danger():
    reports = [make_report("1", 0, "Kochi"), make_report("2", 9, "Kochi")]
    result = summarize(reports)
    assert result.leaderboard[0].count == 2
    assert result.leaderboard[0].avg_danger == 4.5
    assert result.avg_danger_level == 4.5


def test_avg_danger_not_rounded_per_district_but_rounded_overall():
    reports = [make_report("1", 7, "A"), make_report("2", 7, "A"), make_report("3", 8, "A")]
    result = summarize(reports)
    assert result.leaderboard[0].avg_danger == 22 / 3
    assert result.avg_danger_level == 7.3


def test_round_one_is_half_up():
    assert round_one(6.25) == 6.3
    assert round_one(6.24) == 6.2
    assert round_one(0) == 0.0
