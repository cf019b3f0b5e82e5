"""Tests for sample writers and the writer factory."""

import json
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

from prometheus_client import CollectorRegistry, generate_latest

from snapmon.metrics import MetricKind, Sample
from snapmon.writer.base import Writer
from snapmon.writer.factory import StubWriter, WriterFactory
from snapmon.writer.influxdb_writer import InfluxDBWriter, sample_to_point
from snapmon.writer.json_writer import JsonWriter
from snapmon.writer.multi_writer import MultiWriter
from snapmon.writer.prometheus_writer import PrometheusWriter, SampleCollector, sanitize_name

TS = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
ENTRY_TAGS = {'Protocol': 'BGP', 'Hostname': 'sw1', 'mgmtip': '10.0.0.5/24', 'mgmtipv6': ''}


def _samples():
    return [
        Sample('platform', {'ProductName': 'S6000'}, {'hostname': 'sw1', 'mgmt-ip': '10.0.0.5/24'}, TS),
        Sample('copp', {'GreenPackets': 42}, ENTRY_TAGS, TS, MetricKind.COUNTER),
        Sample('copp', {'PeakRate': 100}, ENTRY_TAGS, TS, MetricKind.GAUGE),
        Sample('status', {'ready': False}, {'hostname': 'sw1'}, TS),
    ]


def _families(collector):
    return {metric.name: metric for metric in collector.collect()}


class TestJsonWriter:
    def test_writes_one_file_per_cycle(self, tmp_path):
        writer = JsonWriter(str(tmp_path / "out"))
        assert writer.write(_samples(), loop_iteration=3)

        files = list((tmp_path / "out").glob("snaproute_*_3.json"))
        assert len(files) == 1
        data = json.loads(files[0].read_text())
        assert data[1] == {
            'measurement': 'copp', 'kind': 'counter', 'tags': ENTRY_TAGS,
            'fields': {'GreenPackets': 42}, 'time': TS.isoformat(),
        }


class TestMultiWriter:
    def test_fans_out_and_reports_failures(self):
        ok = MagicMock(spec=Writer)
        ok.write.return_value = True
        failing = MagicMock(spec=Writer)
        failing.write.side_effect = RuntimeError("down")

        writer = MultiWriter([failing, ok])
        assert writer.write(_samples(), 1) is False
        ok.write.assert_called_once()

        writer.close()
        ok.close.assert_called_once()
        failing.close.assert_called_once()


class TestInfluxDB:
    def test_sample_to_point_drops_empty_tags(self):
        line = sample_to_point(_samples()[1]).to_line_protocol()

        assert line.startswith('copp,')
        assert 'Hostname=sw1' in line
        assert 'Protocol=BGP' in line
        assert 'mgmtipv6' not in line
        assert 'GreenPackets=42i' in line
        assert line.endswith(str(int(TS.timestamp())))

    def test_write_submits_each_sample(self):
        client = MagicMock()
        writer = InfluxDBWriter({'influxdb_url': 'https://influx:8181', 'influxdb_database': 'db',
                                 'influxdb_token': 't'}, client=client)

        assert writer.write(_samples(), 1) is True
        assert client.write.call_count == 4

        writer.close()
        client.close.assert_called_once()
        assert writer.client is None

    def test_write_failure_is_reported(self):
        client = MagicMock()
        client.write.side_effect = [None, RuntimeError("rejected"), None, None]
        writer = InfluxDBWriter({'influxdb_url': 'https://influx:8181'}, client=client)

        assert writer.write(_samples(), 1) is False


class TestPrometheus:
    def test_sanitize_name(self):
        assert sanitize_name('mgmt-ip') == 'mgmt_ip'
        assert sanitize_name('Volts in') == 'Volts_in'
        assert sanitize_name('9lives') == '_9lives'

    def test_value_mapping(self):
        collector = SampleCollector()
        collector.update(_samples())
        families = _families(collector)

        counter = families['snaproute_copp_GreenPackets']
        assert counter.type == 'counter'
        assert counter.samples[0].name == 'snaproute_copp_GreenPackets_total'
        assert counter.samples[0].value == 42.0
        assert counter.samples[0].labels['Protocol'] == 'BGP'

        assert families['snaproute_copp_PeakRate'].type == 'gauge'
        assert families['snaproute_status_ready'].samples[0].value == 0.0

        info = families['snaproute_platform_ProductName_info']
        assert info.samples[0].value == 1.0
        assert info.samples[0].labels == {'hostname': 'sw1', 'mgmt_ip': '10.0.0.5/24', 'value': 'S6000'}

    def test_update_replaces_previous_cycle(self):
        collector = SampleCollector()
        collector.update(_samples())
        collector.update(_samples()[:1])
        assert list(_families(collector)) == ['snaproute_platform_ProductName_info']

    def test_writer_exposes_registry(self):
        registry = CollectorRegistry()
        writer = PrometheusWriter(port=0, registry=registry, start_server=False)

        assert writer.write(_samples(), 1) is True
        text = generate_latest(registry).decode()
        assert 'snaproute_copp_GreenPackets_total' in text
        assert 'snaproute_copp_PeakRate' in text


class TestWriterFactory:
    def _settings(self, **overrides):
        values = dict(output='influxdb', to_json=None, influxdb_url=None, influxdb_database=None,
                      influxdb_token=None, tls_ca=None, prometheus_port=8000)
        values.update(overrides)
        return SimpleNamespace(**values)

    def test_to_json_takes_precedence(self, tmp_path):
        writer = WriterFactory.create_writer(self._settings(output='prometheus', to_json=str(tmp_path)))
        assert isinstance(writer, JsonWriter)

    def test_prometheus(self):
        assert isinstance(WriterFactory.create_writer(self._settings(output='prometheus')), PrometheusWriter)

    def test_influxdb_without_connection_falls_back_to_stub(self):
        assert isinstance(WriterFactory.create_writer(self._settings()), StubWriter)

    def test_json_without_directory_falls_back_to_stub(self):
        assert isinstance(WriterFactory.create_writer(self._settings(output='json')), StubWriter)

    def test_both_without_influxdb_keeps_prometheus(self):
        writer = WriterFactory.create_writer(self._settings(output='both'))
        assert isinstance(writer, MultiWriter)
        assert [type(w) for w in writer.writers] == [PrometheusWriter]
