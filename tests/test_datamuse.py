import unittest
from unittest.mock import MagicMock, patch

import requests

from crossfill.io.datamuse_client import DatamuseAPIError, DatamuseClient


class DatamuseClientTests(unittest.TestCase):
    def _response(self, payload):
        response = MagicMock()
        response.json.return_value = payload
        return response

    @patch("crossfill.io.datamuse_client.requests.get")
    def test_search_filters_length_and_letters(self, mock_get) -> None:
        mock_get.return_value = self._response([
            {"word": "cat", "score": 120},
            {"word": "cot"},
            {"word": "c t"},
            {"word": "cart"},
            {"word": "cät"},
        ])
        words = DatamuseClient(max_results=50).search("C?T")

        self.assertEqual(words, ["CAT", "COT"])
        _, kwargs = mock_get.call_args
        self.assertEqual(kwargs["params"], {"sp": "c?t", "max": 50})

    @patch("crossfill.io.datamuse_client.requests.get")
    def test_word_list_formats_scored_entries(self, mock_get) -> None:
        mock_get.return_value = self._response([{"word": "cat"}, {"word": "cut"}])
        self.assertEqual(DatamuseClient().word_list("c?t", score=70), ["CAT;70", "CUT;70"])

    @patch("crossfill.io.datamuse_client.requests.get")
    def test_network_failure_raises_api_error(self, mock_get) -> None:
        mock_get.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(DatamuseAPIError):
            DatamuseClient().search("c?t")

    @patch("crossfill.io.datamuse_client.requests.get")
    def test_unexpected_payload_raises_api_error(self, mock_get) -> None:
        mock_get.return_value = self._response({"error": "bad"})
        with self.assertRaises(DatamuseAPIError):
            DatamuseClient().search("c?t")


if __name__ == "__main__":
    unittest.main()
