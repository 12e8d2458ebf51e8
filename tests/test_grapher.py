"""
Tests for the timing charts and the index / plot command-line tools.
"""
import contextlib
import io
import os
import shutil
import tempfile
import unittest
from unittest import mock

from sitesearch.indexer import build_index
from sitesearch.indexer.timing import load_times, save_times
from sitesearch.monitoring import plot_times
from sitesearch.monitoring.grapher import IndexTimeGrapher, create_dataset, generate_dummy_times


class TestGrapher(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_create_dataset(self):
        self.assertEqual(create_dataset([5, 10, 10]), ([1, 2, 3], [5, 10, 10]))
        self.assertEqual(create_dataset([1500, 2999], unit='sec'), ([1, 2], [1, 2]))
        with self.assertRaises(ValueError):
            create_dataset([1], unit='hours')

    def test_single_series(self):
        chart = IndexTimeGrapher("Document Completion Times", [("Whoosh Indexer", [1, 2, 4])])
        self.assertEqual(len(chart.figure.data), 1)
        trace = chart.figure.data[0]
        self.assertEqual(trace.name, "Whoosh Indexer")
        self.assertEqual(list(trace.y), [1, 2, 4])
        self.assertEqual(chart.figure.layout.title.text, "Document Completion Times")
        self.assertEqual(chart.figure.layout.yaxis.title.text, "Run Time (ms)")
        self.assertFalse(chart.figure.layout.showlegend)

    def test_two_series(self):
        chart = IndexTimeGrapher("Chart", [("A", [1, 2]), ("B", [3, 4, 5])], unit='sec')
        self.assertEqual([trace.name for trace in chart.figure.data], ["A", "B"])
        self.assertEqual(chart.figure.layout.yaxis.title.text, "Run Time (sec)")
        self.assertTrue(chart.figure.layout.showlegend)

    def test_series_count(self):
        with self.assertRaises(ValueError):
            IndexTimeGrapher("Chart", [])
        with self.assertRaises(ValueError):
            IndexTimeGrapher("Chart", [("A", [1]), ("B", [2]), ("C", [3])])

    def test_from_files_and_save(self):
        first = os.path.join(self.tmp_dir, 'first.txt')
        second = os.path.join(self.tmp_dir, 'second.txt')
        save_times(first, [1, 2, 3])
        save_times(second, [2, 4])
        chart = IndexTimeGrapher.from_files([first, second], line_titles=["One", "Two"])
        self.assertEqual([list(trace.y) for trace in chart.figure.data], [[1, 2, 3], [2, 4]])

        output = os.path.join(self.tmp_dir, 'chart.html')
        chart.save(output)
        self.assertTrue(os.path.getsize(output) > 0)

    def test_dummy_times(self):
        times = generate_dummy_times(500, seed=7)
        self.assertEqual(len(times), 500)
        self.assertEqual(times[0], 100)
        self.assertEqual(times, sorted(times))
        self.assertEqual(times, generate_dummy_times(500, seed=7))


class TestPlotTimesCli(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.times_file = os.path.join(self.tmp_dir, 'index_times.txt')
        save_times(self.times_file, [0, 5, 9])

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    @mock.patch.object(plot_times, 'configure_logging')
    def test_writes_chart(self, _logging):
        output = os.path.join(self.tmp_dir, 'chart.html')
        self.assertEqual(plot_times.main([self.times_file, '--output', output]), 0)
        self.assertTrue(os.path.exists(output))

    @mock.patch.object(plot_times, 'configure_logging')
    def test_missing_file(self, _logging):
        with contextlib.redirect_stderr(io.StringIO()):
            status = plot_times.main([os.path.join(self.tmp_dir, 'nope.txt'),
                                      '--output', os.path.join(self.tmp_dir, 'x.html')])
        self.assertEqual(status, 1)

    @mock.patch.object(plot_times, 'configure_logging')
    def test_too_many_files(self, _logging):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                plot_times.main([self.times_file, self.times_file, self.times_file])


class TestBuildIndexCli(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.data_dir = os.path.join(self.tmp_dir, 'Data_Files')
        os.makedirs(self.data_dir)
        self.index_dir = os.path.join(self.tmp_dir, 'Index_Files')
        self.times_file = os.path.join(self.tmp_dir, 'index_times.txt')

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _args(self, *extra):
        return [self.data_dir, '--index-dir', self.index_dir, '--times-file', self.times_file] + list(extra)

    @mock.patch.object(build_index, 'configure_logging')
    def test_builds_index_times_and_chart(self, _logging):
        with open(os.path.join(self.data_dir, 'sites.data'), 'w', encoding='utf-8') as f:
            f.write('{"text": "cats and dogs", "title": "Pets", "url": "a.com"}\n')
            f.write('{"title": "broken"}\n')
            f.write('{"text": "cars and roads", "title": "Autos", "url": "b.com"}\n')
        chart = os.path.join(self.tmp_dir, 'chart.html')

        with contextlib.redirect_stdout(io.StringIO()):
            status = build_index.main(self._args('--graph', chart))

        self.assertEqual(status, 0)
        times = load_times(self.times_file)
        self.assertEqual(len(times), 2)
        self.assertEqual(times, sorted(times))
        self.assertTrue(os.path.isdir(self.index_dir))
        self.assertTrue(os.path.exists(chart))

    @mock.patch.object(build_index, 'configure_logging')
    def test_empty_data_dir(self, _logging):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            status = build_index.main(self._args())
        self.assertEqual(status, 0)
        self.assertIn("No files were indexed", out.getvalue())
        self.assertFalse(os.path.exists(self.times_file))

    @mock.patch.object(build_index, 'configure_logging')
    def test_invalid_data_dir(self, _logging):
        with contextlib.redirect_stderr(io.StringIO()):
            status = build_index.main([os.path.join(self.tmp_dir, 'missing'),
                                       '--index-dir', self.index_dir])
        self.assertEqual(status, 1)


if __name__ == "__main__":
    unittest.main()
