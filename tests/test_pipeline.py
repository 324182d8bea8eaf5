import asyncio
from dataclasses import replace
from unittest.mock import patch

import pytest

from alert_card.errors import AssetLoadFailed, BackdropFetchFailed
from alert_card.models import RenderedAlert
from alert_card.pipeline import build_caption, render_alert, render_alerts


class TestRenderAlert:
    def test_end_to_end(self, sample_alert, backdrop, logo):
        with patch('alert_card.pipeline.fetch_backdrop', return_value=backdrop) as mock_fetch, \
                patch('alert_card.pipeline.load_logo', return_value=logo):
            rendered = render_alert(sample_alert, 'token')

        viewport = mock_fetch.call_args.args[0]
        assert viewport.zoom_level == 8
        assert mock_fetch.call_args.args[2] == 'token'
        assert isinstance(rendered, RenderedAlert)
        assert rendered.alert_id == sample_alert.id
        assert rendered.image[:8] == b'\x89PNG\r\n\x1a\n'
        assert rendered.caption.startswith('Tornado Warning for Twiggs, Wilkinson, Baldwin, Jones')

    def test_backdrop_failure_propagates(self, sample_alert, logo):
        with patch('alert_card.pipeline.fetch_backdrop', side_effect=BackdropFetchFailed('503')), \
                patch('alert_card.pipeline.load_logo', return_value=logo):
            with pytest.raises(BackdropFetchFailed):
                render_alert(sample_alert, 'token')

    def test_logo_failure_propagates(self, sample_alert, backdrop):
        with patch('alert_card.pipeline.fetch_backdrop', return_value=backdrop), \
                patch('alert_card.pipeline.load_logo', side_effect=AssetLoadFailed('missing')):
            with pytest.raises(AssetLoadFailed):
                render_alert(sample_alert, 'token')

    def test_missing_hazards_still_render(self, sample_alert, backdrop, logo):
        alert = replace(sample_alert, description='A tornado warning is in effect.')
        with patch('alert_card.pipeline.fetch_backdrop', return_value=backdrop), \
                patch('alert_card.pipeline.load_logo', return_value=logo):
            assert render_alert(alert, 'token').image[:4] == b'\x89PNG'


class TestRenderAlerts:
    def test_one_failure_does_not_affect_the_other(self, sample_alert, backdrop, logo):
        far_away = replace(sample_alert, id='other', geometry=((-100.0, 45.0), (-99.9, 45.1), (-99.8, 45.0), (-100.0, 45.0)))

        def fake_fetch(viewport, render_config, access_token):
            if viewport.center_lat > 40:
                raise BackdropFetchFailed('tile server down')
            return backdrop

        with patch('alert_card.pipeline.fetch_backdrop', side_effect=fake_fetch), \
                patch('alert_card.pipeline.load_logo', return_value=logo):
            results = asyncio.run(render_alerts([sample_alert, far_away], 'token'))

        assert isinstance(results[0], RenderedAlert)
        assert results[0].alert_id == sample_alert.id
        assert isinstance(results[1], BackdropFetchFailed)

    def test_concurrent_renders_match_sequential(self, sample_alert, backdrop, logo):
        with patch('alert_card.pipeline.fetch_backdrop', return_value=backdrop), \
                patch('alert_card.pipeline.load_logo', return_value=logo):
            sequential = render_alert(sample_alert, 'token')
            concurrent = asyncio.run(render_alerts([sample_alert, sample_alert], 'token'))
        assert all(r == sequential for r in concurrent)


class TestCaption:
    def test_severe_gets_exclamation(self, sample_alert):
        assert build_caption(sample_alert) == (
            'Tornado Warning for Twiggs, Wilkinson, Baldwin, Jones until MARCH 31, 03:15 PM EDT!'
        )

    def test_other_events_get_a_period(self, sample_alert):
        alert = replace(sample_alert, event='Flood Advisory')
        assert build_caption(alert).endswith('EDT.')
