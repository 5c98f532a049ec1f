from irrigplan.solution import Solution


def test_default_solution_is_empty():
    sol = Solution()
    assert sol.choices == []
    assert sol.adf == []


def test_defaults_are_not_shared():
    first = Solution()
    second = Solution()
    first.choices.append(3)
    assert second.choices == []


def test_copy_is_equal_but_independent():
    original = Solution([1, 2, 10], [5.0, 6.5, 7.0])
    clone = original.copy()
    assert clone == original
    clone.choices[0] = 0
    clone.adf[1] = 0.0
    assert original.choices == [1, 2, 10]
    assert original.adf == [5.0, 6.5, 7.0]


def test_direct_update_of_choices():
    sol = Solution([1, 1, 1], [0.0, 0.0, 0.0])
    sol.choices[1] = 4
    sol.adf[2] = 2.5
    assert sol.choices == [1, 4, 1]
    assert sol.adf == [0.0, 0.0, 2.5]