from alert_card.utils.posted_log import PostedAlerts


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestPostedAlerts:
    def test_add_and_contains(self):
        posted = PostedAlerts(clock=FakeClock())
        assert 'a' not in posted
        posted.add('a')
        assert 'a' in posted
        assert len(posted) == 1

    def test_old_ids_are_forgotten(self):
        clock = FakeClock()
        posted = PostedAlerts(max_age=3600, clock=clock)
        posted.add('old')
        clock.now += 1800
        posted.add('new')
        clock.now += 2000
        assert 'old' not in posted
        assert 'new' in posted

    def test_size_bound_drops_oldest(self):
        clock = FakeClock()
        posted = PostedAlerts(max_size=3, clock=clock)
        for alert_id in ['a', 'b', 'c', 'd']:
            clock.now += 1
            posted.add(alert_id)
        assert 'a' not in posted
        assert all(alert_id in posted for alert_id in ['b', 'c', 'd'])
        assert len(posted) == 3

    def test_persists_across_restarts(self, tmp_path):
        log_file = tmp_path / 'logs' / 'posted.log'
        clock = FakeClock()
        PostedAlerts(str(log_file), clock=clock).add('urn:oid:1')
        reloaded = PostedAlerts(str(log_file), clock=clock)
        assert 'urn:oid:1' in reloaded

    def test_reload_respects_window(self, tmp_path):
        log_file = tmp_path / 'posted.log'
        clock = FakeClock()
        PostedAlerts(str(log_file), max_age=60, clock=clock).add('urn:oid:1')
        clock.now += 120
        assert 'urn:oid:1' not in PostedAlerts(str(log_file), max_age=60, clock=clock)

    def test_reads_bare_ids(self, tmp_path):
        log_file = tmp_path / 'posted.log'
        log_file.write_text('urn:oid:old1\n\nurn:oid:old2\n')
        posted = PostedAlerts(str(log_file), clock=FakeClock())
        assert 'urn:oid:old1' in posted
        assert 'urn:oid:old2' in posted

    def test_creates_missing_log(self, tmp_path):
        log_file = tmp_path / 'new' / 'posted.log'
        posted = PostedAlerts(str(log_file), clock=FakeClock())
        assert log_file.exists()
        assert len(posted) == 0
