from space_defender.collisions import CollisionResolver
from space_defender.entities import Alien, Asteroid, Bullet, EntityGroup


def groups_with(bullets, aliens):
    b, a = EntityGroup("bullet"), EntityGroup("alien")
    for e in bullets:
        b.add(e)
    for e in aliens:
        a.add(e)
    return {"bullet": b, "alien": a}


def test_rules_are_dispatched_by_kind_pair():
    hits = []
    resolver = CollisionResolver()
    resolver.add_overlap("bullet", "alien", lambda b, a: hits.append((b, a)))
    resolver.add_overlap("bullet", "asteroid", lambda b, a: hits.append("wrong"))

    bullet, alien = Bullet(100, 100), Alien(100, 100)
    far = Alien(700, 100)
    fired = resolver.resolve(groups_with([bullet], [alien, far]))

    assert fired == 1
    assert hits == [(bullet, alien)]


def test_each_overlapping_pair_resolves_independently():
    killed = []
    resolver = CollisionResolver()

    def kill(bullet, alien):
        bullet.recycle()
        alien.destroy()
        killed.append(alien)

    resolver.add_overlap("bullet", "alien", kill)
    bullet = Bullet(100, 100)
    a1, a2 = Alien(95, 100), Alien(105, 100)
    resolver.resolve(groups_with([bullet], [a1, a2]))
    assert killed == [a1, a2]


def test_destroyed_entities_are_skipped():
    seen = []
    resolver = CollisionResolver()

    def destroy_both(bullet, alien):
        seen.append((bullet, alien))
        bullet.destroy()

    resolver.add_overlap("bullet", "alien", destroy_both)
    bullet = Bullet(100, 100)
    resolver.resolve(groups_with([bullet], [Alien(100, 100), Alien(101, 100)]))
    assert len(seen) == 1


def test_stop_ends_resolution():
    calls = []
    resolver = CollisionResolver()
    resolver.add_overlap("bullet", "alien", lambda b, a: calls.append(a))
    groups = groups_with([Bullet(100, 100)], [Alien(100, 100), Alien(101, 100)])
    resolver.resolve(groups, stop=lambda: len(calls) >= 1)
    assert len(calls) == 1


def test_missing_groups_and_removed_rules():
    resolver = CollisionResolver()
    resolver.add_overlap("bullet", "asteroid", lambda b, a: None)
    assert resolver.resolve({"bullet": [Bullet(0, 0)]}) == 0
    resolver.remove_overlap("bullet", "asteroid")
    assert resolver.resolve({"bullet": [Bullet(0, 0)], "asteroid": [Asteroid(0, 0)]}) == 0
