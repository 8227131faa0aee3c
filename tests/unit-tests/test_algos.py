import sys, os, unittest
from decimal import Decimal
from fractions import Fraction

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from edit_matrix.utils import (
    EditKind, EditAction, PathStep, DiffResult, TokenType,
    make_skip, make_insert, make_delete, make_replace,
    count_operations, tokenize_lines, tokenize_words, tokenize_chars, get_tokenizer
)
from edit_matrix.costs import CostModel, one, one_elements, one_slice, one_string
from edit_matrix.matrix import (
    DistanceMatrix, DEFAULT_KERNEL, kernel, build_matrix, build_matrix_t, build_matrix_r,
    build_matrix_slices, build_matrix_t_slices, distance
)
from edit_matrix.backtrack import reconstruct_path, classify_path, classify_step
from edit_matrix.diff import diff, edit_script, patch, compare


SKIP, INSERT, DELETE, REPLACE = EditKind.SKIP, EditKind.INSERT, EditKind.DELETE, EditKind.REPLACE


class Tagged:
    def __init__(self, value, tag=None):
        self.value = value
        self.tag = tag

    def __add__(self, other):
        return Tagged(self.value + other.value, other.tag or self.tag)

    def __lt__(self, other):
        return self.value < other.value


class TestCoreTypes(unittest.TestCase):
    def test_edit_kind(self):
        self.assertEqual(list(EditKind), [SKIP, INSERT, DELETE, REPLACE])
        self.assertEqual(EditKind('replace'), REPLACE)
        self.assertEqual(SKIP.value, 'skip')

    def test_edit_action(self):
        action = EditAction(DELETE, 1, 2)
        self.assertEqual((action.kind, action.source_index, action.target_index), (DELETE, 1, 2))
        self.assertEqual(action[0], DELETE)
        self.assertIn('delete', repr(action))
        self.assertEqual(PathStep(1, 2).col, 2)

    def test_make_helpers(self):
        self.assertEqual(make_skip(0, 0).kind, SKIP)
        self.assertEqual(make_insert(0, 1).kind, INSERT)
        self.assertEqual(make_delete(1, 0).kind, DELETE)
        self.assertEqual(make_replace(2, 3), EditAction(REPLACE, 2, 3))

    def test_counts(self):
        script = [make_skip(0, 0), make_delete(1, 1), make_insert(2, 1), make_replace(2, 2)]
        counts = count_operations(script)
        self.assertEqual((counts['skips'], counts['deletes'], counts['inserts'], counts['replaces']), (1, 1, 1, 1))
        self.assertEqual(counts['total'], 4)

    def test_diff_result(self):
        result = DiffResult.from_script([make_skip(0, 0), make_insert(1, 1)], 1, 2, 1)
        self.assertAlmostEqual(result.similarity_ratio, 2 / 3)
        self.assertFalse(result.identical)
        self.assertEqual(DiffResult.from_script([], 0, 0, 0).similarity_ratio, 1.0)
        self.assertTrue(DiffResult.from_script([], 0, 0, 0).identical)

    def test_tokenizers(self):
        self.assertEqual(tokenize_lines("a\nb"), ["a", "b"])
        self.assertEqual(tokenize_lines(""), [])
        self.assertEqual(tokenize_words("a  b"), ["a", "  ", "b"])
        self.assertEqual(tokenize_chars("ab"), ["a", "b"])
        self.assertIs(get_tokenizer(TokenType.WORD), tokenize_words)
        with self.assertRaises(ValueError):
            get_tokenizer(TokenType.BYTE)


class TestCostModel(unittest.TestCase):
    def test_defaults(self):
        costs = CostModel()
        self.assertEqual(costs.deletion_cost(3), 1)
        self.assertEqual(costs.insertion_cost(0), 1)
        self.assertIsNone(costs.substitution_cost(0, 0))
        self.assertEqual(one(10), 1)

    def test_none_costs_are_zero(self):
        costs = CostModel(deletion=lambda i: None, insertion=lambda j: None)
        self.assertEqual(costs.deletion_cost(0), 0)
        self.assertEqual(costs.insertion_cost(0), 0)

    def test_adapters(self):
        self.assertIsNone(one_elements('a', 'a'))
        self.assertEqual(one_elements('a', 'b'), 1)
        sub = one_slice([1, 2], [2, 1])
        self.assertEqual(sub(0, 0), 1)
        self.assertIsNone(sub(0, 1))
        raw = one_string("☺", "Ö")
        self.assertEqual(raw(0, 0), 1)
        self.assertIsNone(one_string(b"ab", "b")(1, 0))

    def test_for_sequences(self):
        costs = CostModel.for_sequences("ab", "ba")
        self.assertEqual(costs.substitution_cost(0, 0), 1)
        self.assertIsNone(costs.substitution_cost(0, 1))
        custom = CostModel.for_sequences("ab", "AB", substitution=lambda x, y: None if x.lower() == y.lower() else 2)
        self.assertIsNone(custom.substitution_cost(1, 1))
        self.assertEqual(custom.substitution_cost(0, 1), 2)

    def test_constant(self):
        costs = CostModel.constant(deletion=5, insertion=1)
        self.assertEqual(costs.deletion_cost(0), 5)
        self.assertEqual(costs.insertion_cost(7), 1)

    def test_transposed(self):
        costs = CostModel(deletion=lambda i: 10 + i, insertion=lambda j: 20 + j,
                          substitution=lambda x, y: 100 * x + y)
        t = costs.transposed()
        self.assertEqual(t.deletion_cost(1), 21)
        self.assertEqual(t.insertion_cost(1), 11)
        self.assertEqual(t.substitution_cost(2, 3), 302)
        self.assertIsNone(CostModel().transposed().substitution)

    def test_reversed(self):
        costs = CostModel(deletion=lambda i: i, insertion=lambda j: j, substitution=lambda x, y: (x, y))
        r = costs.reversed(3, 5)
        self.assertEqual(r.deletion_cost(0), 2)
        self.assertEqual(r.insertion_cost(0), 4)
        self.assertEqual(r.substitution_cost(0, 1), (2, 3))
        self.assertIsNone(CostModel().reversed(3, 5).deletion)


class TestKernel(unittest.TestCase):
    def _pick(self, dele, ins, sub):
        # 2x2 grid: up cell at 1, left cell at 2, diagonal at 0
        d = [Tagged(0), Tagged(0), Tagged(0), None]
        return kernel(d, 1, 1, 2, Tagged(sub, 'sub'), Tagged(dele, 'del'), Tagged(ins, 'ins')).tag

    def test_strict_minimum(self):
        self.assertEqual(self._pick(1, 2, 3), 'del')
        self.assertEqual(self._pick(2, 1, 3), 'ins')
        self.assertEqual(self._pick(2, 3, 1), 'sub')

    def test_substitution_wins_ties(self):
        self.assertEqual(self._pick(1, 1, 1), 'sub')
        self.assertEqual(self._pick(1, 2, 1), 'sub')
        self.assertEqual(self._pick(2, 1, 1), 'sub')

    def test_insertion_beats_deletion(self):
        self.assertEqual(self._pick(1, 1, 2), 'ins')

    def test_default_kernel_alias(self):
        self.assertIs(DEFAULT_KERNEL, kernel)


class TestBuildMatrix(unittest.TestCase):
    def test_kitten_sitting(self):
        mat = build_matrix_slices("kitten", "sitting")
        self.assertEqual(distance(mat), 3)
        self.assertEqual((mat.height, mat.width), (7, 8))
        self.assertEqual(len(mat), 56)

    def test_boundaries_are_cumulative(self):
        dels, inss = [2, 3, 4], [5, 6]
        mat = build_matrix(3, 2, dels.__getitem__, inss.__getitem__)
        self.assertEqual([mat[i, 0] for i in range(4)], [0, 2, 5, 9])
        self.assertEqual(mat.row(0), [0, 5, 11])

    def test_empty_inputs(self):
        mat = build_matrix(0, 0)
        self.assertEqual(list(mat), [0])
        self.assertEqual(distance(mat), 0)
        self.assertEqual(distance(build_matrix(0, 4)), 4)
        self.assertEqual(distance(build_matrix(3, 0)), 3)
        self.assertEqual(distance(build_matrix(0, 3, insertion=lambda j: 2)), 6)

    def test_distance_of_zero_cells(self):
        self.assertIsNone(distance([]))
        self.assertIsNone(distance(DistanceMatrix([], 0)))

    def test_missing_substitution_means_no_cost(self):
        self.assertEqual(distance(build_matrix(3, 3)), 0)
        self.assertEqual(distance(build_matrix(3, 5)), 2)

    def test_negative_dimensions(self):
        with self.assertRaises(ValueError):
            build_matrix(-1, 2)

    def test_costs_and_callbacks_are_exclusive(self):
        with self.assertRaises(ValueError):
            build_matrix(1, 1, deletion=one, costs=CostModel())

    def test_custom_costs_prefer_cheaper_edits(self):
        costs = CostModel.for_sequences("ab", "b", deletion=lambda i: 5, insertion=lambda j: 1)
        mat = build_matrix(2, 1, costs=costs)
        self.assertEqual(distance(mat), 5)

    def test_custom_kernel(self):
        def capped(d, i, j, n, cost, del_cost, ins_cost):
            return min(kernel(d, i, j, n, cost, del_cost, ins_cost), 2)

        mat = build_matrix_slices("abcdef", "uvwxyz", kernel=capped)
        self.assertEqual(distance(mat), 2)

    def test_numeric_types(self):
        self.assertEqual(distance(build_matrix_slices("ab", "ba", lambda i: 0.5, lambda j: 0.5)), 1.0)
        half = Fraction(1, 2)
        self.assertEqual(distance(build_matrix_slices("abc", "", lambda i: half)), Fraction(3, 2))
        tenth = Decimal("0.1")
        self.assertEqual(distance(build_matrix_slices("", "abc", insertion=lambda j: tenth)), Decimal("0.3"))

    def test_unicode_and_raw_strings(self):
        word1, word2 = "☺", "Ö"
        runes = build_matrix(len(word1), len(word2), substitution=one_slice(word1, word2))
        self.assertEqual(distance(runes), 1)
        raw1, raw2 = word1.encode(), word2.encode()
        raw = build_matrix(len(raw1), len(raw2), substitution=one_string(word1, word2))
        self.assertEqual(distance(raw), 3)

    def test_transposed(self):
        word1, word2 = "1234567", "137"
        mat = build_matrix(len(word1), len(word2), substitution=one_string(word1, word2))
        matt = build_matrix_t(len(word1), len(word2), substitution=one_string(word1, word2))
        self.assertEqual((matt.height, matt.width), (4, 8))
        for i in range(len(word1) + 1):
            for j in range(len(word2) + 1):
                self.assertEqual(mat[i, j], matt[j, i])
        self.assertEqual(distance(mat), distance(matt))
        self.assertEqual(distance(mat), 4)

    def test_transposed_slices(self):
        matt = build_matrix_t_slices(["0", "1", "2"], ["0", "2"])
        self.assertEqual((matt.height, matt.width), (3, 4))
        self.assertEqual(distance(matt), 1)

    def test_reversed(self):
        a, b = "abcd", "acd"
        mat = build_matrix_r(len(a), len(b), costs=CostModel.for_sequences(a, b))
        self.assertEqual(mat, build_matrix_slices(a[::-1], b[::-1]))


class TestDistanceMatrix(unittest.TestCase):
    def test_indexing(self):
        mat = DistanceMatrix([0, 1, 2, 1, 0, 1], 3)
        self.assertEqual(mat[1, 2], 1)
        self.assertEqual(mat[-1], 1)
        self.assertEqual(mat[0:3], [0, 1, 2])
        self.assertEqual(mat.rows(), [[0, 1, 2], [1, 0, 1]])
        self.assertEqual((mat.source_length, mat.target_length), (1, 2))
        with self.assertRaises(IndexError):
            mat[2, 0]
        self.assertIn("2x3", repr(mat))

    def test_transpose(self):
        mat = DistanceMatrix([0, 1, 2, 1, 0, 1], 3)
        t = mat.transpose()
        self.assertEqual(t.rows(), [[0, 1], [1, 0], [2, 1]])
        self.assertEqual(t.transpose(), mat)

    def test_invalid_shapes(self):
        with self.assertRaises(ValueError):
            DistanceMatrix([0, 1, 2], 2)
        with self.assertRaises(ValueError):
            DistanceMatrix([0], 0)
        with self.assertRaises(ValueError):
            DistanceMatrix([], -1)


class TestReconstructPath(unittest.TestCase):
    def test_simple_path(self):
        mat = build_matrix_slices([0, 1, 2], [0, 2])
        path = reconstruct_path(mat, mat.width)
        self.assertEqual(path, [(0, 0), (1, 1), (2, 1), (3, 2)])

    def test_empty_matrix(self):
        self.assertEqual(reconstruct_path(build_matrix(0, 0), 1), [])
        self.assertEqual(reconstruct_path([], 0), [])

    def test_boundary_moves(self):
        self.assertEqual(reconstruct_path(build_matrix(0, 2), 3), [(0, 0), (0, 1), (0, 2)])
        self.assertEqual(reconstruct_path(build_matrix(2, 0), 1), [(0, 0), (1, 0), (2, 0)])

    def test_diagonal_wins_ties(self):
        self.assertEqual(reconstruct_path([0, 0, 0, 0], 2), [(0, 0), (1, 1)])

    def test_left_beats_up(self):
        self.assertEqual(reconstruct_path([1, 0, 0, 1], 2), [(0, 0), (1, 0), (1, 1)])

    def test_up_when_strictly_smaller(self):
        self.assertEqual(reconstruct_path([1, 0, 1, 1], 2), [(0, 0), (0, 1), (1, 1)])

    def test_classification(self):
        mat = [0, 1, 1, 1]
        self.assertEqual(classify_step(mat, 2, PathStep(0, 0), PathStep(1, 1)), EditAction(REPLACE, 0, 0))
        self.assertEqual(classify_step([0, 1, 1, 0], 2, PathStep(0, 0), PathStep(1, 1)), EditAction(SKIP, 0, 0))
        self.assertEqual(classify_step(mat, 2, PathStep(1, 0), PathStep(1, 1)), EditAction(INSERT, 1, 0))
        self.assertEqual(classify_step(mat, 2, PathStep(0, 1), PathStep(1, 1)), EditAction(DELETE, 0, 1))

    def test_bad_steps(self):
        for prev, cur in [((0, 0), (0, 0)), ((0, 0), (2, 1)), ((1, 1), (0, 1))]:
            with self.assertRaises(ValueError):
                classify_step([0] * 9, 3, PathStep(*prev), PathStep(*cur))

    def test_classify_path(self):
        self.assertEqual(list(classify_path([0], 1, [])), [])
        path = [PathStep(0, 0), PathStep(0, 1)]
        self.assertEqual(list(classify_path([0, 1], 2, path)), [EditAction(INSERT, 0, 0)])


class TestDiff(unittest.TestCase):
    def test_skip_delete_skip(self):
        mat = build_matrix_slices([0, 1, 2], [0, 2])
        self.assertEqual(distance(mat), 1)
        self.assertEqual(edit_script(mat), [EditAction(SKIP, 0, 0), EditAction(DELETE, 1, 1),
                                            EditAction(SKIP, 2, 1)])

    def test_kitten_sitting_script(self):
        mat = build_matrix_slices("kitten", "sitting")
        script = edit_script(mat, mat.width)
        counts = count_operations(script)
        self.assertEqual((counts['replaces'], counts['inserts'], counts['deletes']), (2, 1, 0))
        self.assertEqual(''.join(patch("kitten", "sitting", script)), "sitting")

    def test_both_empty(self):
        mat = build_matrix_slices("", "")
        self.assertEqual(distance(mat), 0)
        self.assertEqual(edit_script(mat), [])
        calls = []
        diff(mat, mat.width, lambda *args: calls.append(args) or True)
        self.assertEqual(calls, [])

    def test_weighted_delete(self):
        costs = CostModel.for_sequences("ab", "b", deletion=lambda i: 5, insertion=lambda j: 1)
        mat = build_matrix(2, 1, costs=costs)
        script = edit_script(mat)
        self.assertEqual(distance(mat), 5)
        kinds = [a.kind for a in script]
        self.assertEqual(kinds.count(DELETE), 1)
        self.assertNotIn(INSERT, kinds)
        # cell values steer backtracking: cost-5 delete then cost-0 match was the optimum
        self.assertEqual(script, [EditAction(REPLACE, 0, 0), EditAction(DELETE, 1, 1)])
        self.assertEqual(patch("ab", "b", script), ["b"])

    def test_sink_receives_every_step(self):
        mat = build_matrix_slices("abc", "axcd")
        seen = []

        def sink(kind, x, y):
            seen.append((kind, x, y))
            return True

        diff(mat, mat.width, sink)
        self.assertEqual(seen, [tuple(a) for a in edit_script(mat)])

    def test_sink_can_stop(self):
        mat = build_matrix_slices("abcdef", "abcdef")
        seen = []

        def sink(kind, x, y):
            seen.append(x)
            return len(seen) < 2

        diff(mat, mat.width, sink)
        self.assertEqual(seen, [0, 1])

    def test_flat_buffer_input(self):
        mat = build_matrix_slices("ab", "b")
        self.assertEqual(edit_script(list(mat), mat.width), edit_script(mat))


class TestPatch(unittest.TestCase):
    def test_roundtrip(self):
        a, b = list("saturday"), list("sunday")
        self.assertEqual(patch(a, b, edit_script(build_matrix_slices(a, b))), b)

    def test_inconsistent_scripts(self):
        with self.assertRaises(ValueError):
            patch("ab", "ab", [make_skip(0, 0)])
        with self.assertRaises(ValueError):
            patch("ab", "ab", [make_skip(0, 1), make_skip(1, 1)])
        with self.assertRaises(ValueError):
            patch("a", "b", [make_insert(1, 0), make_delete(0, 0)])
        with self.assertRaises(ValueError):
            patch("a", "a", [make_skip(0, 0), make_delete(1, 1)])

    def test_free_substitution_is_not_patchable(self):
        m = build_matrix_slices("a", "b", substitution=lambda x, y: 0)
        self.assertEqual(distance(m), 0)
        script = edit_script(m)
        self.assertEqual(script, [make_skip(0, 0)])
        with self.assertRaises(ValueError):
            patch("a", "b", script)


class TestCompare(unittest.TestCase):
    def test_compare_defaults(self):
        result = compare("kitten", "sitting")
        self.assertEqual(result.distance, 3)
        self.assertEqual(result.counts['skips'], 4)
        self.assertEqual((result.source_length, result.target_length), (6, 7))

    def test_compare_with_costs(self):
        result = compare("ab", "b", CostModel.constant(deletion=5, insertion=1))
        self.assertEqual(result.distance, 5)
        self.assertFalse(result.identical)

    def test_compare_identical(self):
        result = compare([1, 2, 3], [1, 2, 3])
        self.assertTrue(result.identical)
        self.assertEqual(result.similarity_ratio, 1.0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
