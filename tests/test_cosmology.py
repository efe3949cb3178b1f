#!/usr/bin/python3

"""
Tests for the cosmology model lifecycle (cosmoeval/cosmology.py)

Tests validate:
1. No calculations at construction
2. Tables are computed once and reused
3. Releasing tables for any set of computed tables
4. Status codes on failures

Run with: pytest tests/test_cosmology.py -v
"""

import itertools
import numpy as np
import pytest
from cosmoeval import Cosmology, Configuration, CosmologyError, cosmology
from cosmoeval import TransferFunction, NonlinearModel
from cosmoeval import STATUS_OK, STATUS_DOMAIN_ERROR, STATUS_MODEL_ERROR, STATUS_SPLINE_ERROR
from cosmoeval import background
from cosmoeval.power_spectrum.linear_models import eisenstein98_zb


class CountingTransfer(TransferFunction):
    def __init__(self):
        self.calls = 0

    def call(self, params, k):
        self.calls += 1
        return eisenstein98_zb(params, k)

class CountingNonlinear(NonlinearModel):
    def __init__(self):
        self.calls = 0

    def call(self, model, k, a, pk_lin):
        self.calls += 1
        return 1.5 * pk_lin

class InvalidTransfer(TransferFunction):
    def call(self, params, k):
        return np.full_like(k, np.nan)

QUERIES = {'distances': lambda cm: cm.comovingRadialDistance(0.5),
           'growth'   : lambda cm: cm.growthFactor(0.5),
           'power'    : lambda cm: cm.linearMatterPower(0.1, 0.5),
           'nonlinear': lambda cm: cm.nonlinearMatterPower(0.1, 0.5),
           'sigma'    : lambda cm: cm.sigma8(), }


class TestConstruction:
    """Construction of a model."""

    def test_nothing_computed(self, params):
        cm = Cosmology(params)
        assert cm.status == STATUS_OK
        assert not any([ cm.computed_distances, cm.computed_growth, cm.computed_power,
                         cm.computed_nonlin_power, cm.computed_sigma ])
        assert not any( slot.computed for slot in cm.cache.slots() )
        assert cm.growth0 is None

    def test_default_models(self, params):
        cm = Cosmology(params)
        assert cm.transfer_function is TransferFunction.available.get('eisenstein98_zb')
        assert cm.nonlinear_model is NonlinearModel.available.get('linear')

    def test_unknown_model(self, params):
        with pytest.raises(CosmologyError) as err:
            Cosmology(params, Configuration(transfer_function = 'no_such_model'))
        assert err.value.status == STATUS_MODEL_ERROR

    def test_wrong_model_type(self, params):
        with pytest.raises(CosmologyError):
            Cosmology(params, Configuration(window = CountingTransfer()))

    def test_wrong_params(self):
        with pytest.raises(CosmologyError):
            Cosmology({'h': 0.7})


class TestCaching:
    """Tables are computed once."""

    def test_linear_power_computed_once(self, params):
        transfer = CountingTransfer()
        cm = Cosmology(params, Configuration(transfer_function = transfer))
        p1 = cm.linearMatterPower(0.1, 0.8)
        assert transfer.calls == 1
        p2 = cm.linearMatterPower(0.1, 0.8)
        assert p1 == p2
        assert transfer.calls == 1
        assert cm.computed_power and cm.computed_growth

    def test_nonlinear_power_computed_once(self, params):
        model = CountingNonlinear()
        cm = Cosmology(params, Configuration(matter_power_spectrum = model))
        p1 = cm.nonlinearMatterPower(0.1, 0.8)
        p2 = cm.nonlinearMatterPower(0.1, 0.8)
        assert p1 == p2
        assert model.calls == 1
        assert p1 == pytest.approx(1.5 * cm.linearMatterPower(0.1, 0.8), rel = 1e-04)

    def test_sigma_reuses_power(self, sigma8_params):
        transfer = CountingTransfer()
        cm = Cosmology(sigma8_params, Configuration(transfer_function = transfer))
        s1 = cm.sigma8()
        calls = transfer.calls
        s2 = cm.sigma8()
        cm.linearMatterPower([0.01, 0.1, 1.0])
        assert s1 == s2
        assert transfer.calls == calls

    def test_only_needed_tables(self, model):
        model.comovingRadialDistance(0.5)
        assert model.computed_distances
        assert not model.computed_growth and not model.computed_power

    def test_tables_are_write_once(self, model):
        model.comovingRadialDistance(0.5)
        table = model.cache.chi.value
        with pytest.raises(CosmologyError):
            model.cache.chi.fill(table)
        assert model.cache.chi.value is table


class TestRelease:
    """Releasing the tables."""

    @pytest.mark.parametrize("names", [ names for n in range(len(QUERIES) + 1)
                                        for names in itertools.combinations(QUERIES, n) ])
    def test_free_any_subset(self, params, names):
        cm = Cosmology(params)
        for name in names:
            QUERIES[name](cm)
        computed = sum( slot.computed for slot in cm.cache.slots() )
        assert cm.cache.release() == computed
        cm.free()
        assert cm.closed
        assert not any( slot.computed for slot in cm.cache.slots() )

    def test_free_twice(self, model):
        model.sigma8()
        model.free()
        model.free()
        assert model.closed

    def test_use_after_free(self, model):
        model.comovingRadialDistance(0.5)
        model.free()
        for query in QUERIES.values():
            with pytest.raises(CosmologyError) as err:
                query(model)
            assert err.value.status == STATUS_MODEL_ERROR

    def test_context_manager(self, params):
        with Cosmology(params) as cm:
            cm.growthFactor(0.5)
            assert cm.computed_growth
        assert cm.closed and not cm.computed_growth


class TestStatus:
    """Failure status of a model."""

    def test_domain_error(self, model):
        with pytest.raises(CosmologyError) as err:
            model.hubbleRate(1e-06)
        assert err.value.status == STATUS_DOMAIN_ERROR
        assert model.status == STATUS_DOMAIN_ERROR
        assert model.status_message

    def test_non_positive_scale_factor(self, model):
        with pytest.raises(CosmologyError):
            model.growthFactor(0.)
        assert model.status == STATUS_DOMAIN_ERROR

    def test_first_failure_is_kept(self, params):
        cm = Cosmology(params, Configuration(transfer_function = InvalidTransfer()))
        with pytest.raises(CosmologyError):
            cm.hubbleRate(1e-06)
        with pytest.raises(CosmologyError) as err:
            cm.linearMatterPower(0.1)
        assert err.value.status == STATUS_SPLINE_ERROR
        assert cm.status == STATUS_DOMAIN_ERROR

    def test_partial_failure(self, params):
        cm = Cosmology(params, Configuration(transfer_function = InvalidTransfer()))
        with pytest.raises(CosmologyError):
            cm.sigma8()
        assert cm.status != STATUS_OK
        assert not cm.computed_power
        # tables which do not depend on the power spectrum are still usable
        assert cm.growthFactor(1.) == pytest.approx(1.)
        assert cm.comovingRadialDistance(0.5) > 0.


    @pytest.mark.parametrize("query, flag, slots", [
        (lambda cm: cm.comovingRadialDistance(0.5), 'computed_distances', ('chi', 'achi', 'E')),
        (lambda cm: cm.growthFactor(0.5), 'computed_growth', ('growth', 'fgrowth')), ])
    def test_retry_after_failed_table(self, params, monkeypatch, query, flag, slots):
        # the second table of the group fails on the first attempt only
        calls, original = [], background.Interpolator1D
        def flaky(*args, **kwargs):
            calls.append(1)
            if len(calls) == 2:
                raise ValueError("spline failed")
            return original(*args, **kwargs)

        cm = Cosmology(params)
        monkeypatch.setattr(background, 'Interpolator1D', flaky)
        with pytest.raises(CosmologyError) as err:
            query(cm)
        assert err.value.status == STATUS_SPLINE_ERROR
        assert not any( getattr(cm.cache, name).computed for name in slots )
        assert not getattr(cm, flag)

        res = query(cm)
        assert getattr(cm, flag)
        assert query(cm) == res
        assert cm.status == STATUS_SPLINE_ERROR


class TestBuiltins:
    """Predefined cosmologies."""

    @pytest.mark.parametrize("name", ['plank18', 'plank15', 'wmap08', 'millanium'])
    def test_builtin(self, name):
        cm = cosmology(name)
        assert cm.name == name
        assert cm.params.sigma8 is not None
        assert cm.params.isFlat()

    def test_plank18(self):
        p = cosmology('plank18').params
        assert p.h == 0.6790
        assert p.Omega_m == pytest.approx(0.3065)

    def test_new_model(self):
        cm = cosmology('mine', 0.25, 0.05, 0.7, 0.96, sigma8 = 0.8)
        assert cm.name == 'mine'
        assert cm.params.Omega_c == 0.25

    def test_unknown(self):
        with pytest.raises(CosmologyError):
            cosmology('no_such_cosmology')
