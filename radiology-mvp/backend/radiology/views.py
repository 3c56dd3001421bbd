import logging

from django.contrib import messages
from django.core.exceptions import BadRequest
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.views import View
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .authorization import radiology_access
from .exception_handler import error_body
from .exceptions import BaseAppException, BlockError
from .forms import RadiologyOrderForm, StudyForm
from .models import RadiologyOrder, Study
from .outcomes import (
    ACTION_OUTCOMES,
    invalid_form_outcome,
    patient_dashboard_url,
    resolve_action_outcome,
    resolve_save_outcome,
)
from .serializers import serialize_order_detail, serialize_patient_orders, serialize_search_results

logger = logging.getLogger(__name__)

SAVE_ACTION = 'save_order'
FORM_ACTIONS = (SAVE_ACTION, *ACTION_OUTCOMES)


def patient_id_param(request):
    """Target patient from ?patient_id= / POST patient_id. None if absent."""
    raw = request.POST.get('patient_id') or request.GET.get('patient_id')
    if not raw:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise BadRequest(f"Invalid patient_id: {raw!r}")


def action_flag(post):
    """Which submit button was pressed. The first form action present wins."""
    for action in FORM_ACTIONS:
        if action in post:
            return action
    return None


class ExceptionHandlerMixin:
    """
    非 DRF 的 JSON View 用：BaseAppException → 统一格式的 JsonResponse。
    其他异常不处理，照常冒泡。
    """

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BaseAppException as exc:
            logger.info("[%s] %s %s", type(self).__name__, exc.code, exc.message)
            return JsonResponse(error_body(exc), status=exc.http_status)


class NotFoundMixin:
    """Service 层的 *_NOT_FOUND BlockError → 404 页面，其余异常照常冒泡。"""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BlockError as exc:
            if exc.is_not_found:
                raise Http404(exc.message) from exc
            raise


# ── HTML: order form ───────────────────────────────────────────────────────

class RadiologyOrderFormView(NotFoundMixin, View):
    """
    GET  /radiology/orders/new/           新订单（?patient_id= 预填患者）
    GET  /radiology/orders/<order_id>/    已有订单 + study
    POST 同上，按 submit 的 action flag 分派：
         save_order / void_order / unvoid_order / discontinue_order / undiscontinue_order
    """

    template_name = 'radiology/radiology_order_form.html'

    def get(self, request, order_id=None):
        patient_id = patient_id_param(request)

        if order_id is None:
            patient = services.get_patient(patient_id) if patient_id is not None else None
            order, study = services.new_order(request.user, patient)
        else:
            order = services.get_order(order_id)
            study = services.get_study_by_order(order)

        return self.render_form(
            request,
            RadiologyOrderForm(instance=order),
            StudyForm(instance=study),
            patient_id,
        )

    def post(self, request, order_id=None):
        action = action_flag(request.POST)
        if action is None:
            raise BadRequest("No order form action submitted.")

        patient_id = patient_id_param(request)
        if action == SAVE_ACTION:
            return self.save(request, order_id, patient_id)

        if order_id is None:
            raise BadRequest(f"{action} requires an existing order.")
        return self.change_lifecycle(request, action, order_id)

    def save(self, request, order_id, patient_id):
        if order_id is None:
            order, study = RadiologyOrder(), Study()
        else:
            order = services.get_order(order_id)
            study = services.get_study_by_order(order)

        order_form = RadiologyOrderForm(request.POST, instance=order)
        study_form = StudyForm(request.POST, instance=study)

        # 两个都要跑 is_valid()，页面上才能同时显示两边的错误
        order_valid = order_form.is_valid()
        study_valid = study_form.is_valid()
        if not (order_valid and study_valid):
            logger.info("[RadiologyOrderForm] validation failed for order_id=%s", order_id)
            return self.respond(request, invalid_form_outcome(), order_form, study_form, patient_id)

        # performed_status 不在 StudyForm 里，守卫看到的是库里保存的状态
        order, study = services.save_order_with_study(
            order_form.save(commit=False),
            study_form.save(commit=False),
        )
        outcome = resolve_save_outcome(
            order,
            study,
            can_schedule=radiology_access.can_schedule(request.user),
            patient_id=patient_id,
        )
        return self.respond(
            request,
            outcome,
            RadiologyOrderForm(instance=order),
            StudyForm(instance=study),
            patient_id,
        )

    def change_lifecycle(self, request, action, order_id):
        order = services.get_order(order_id)
        reason = request.POST.get('reason', '')

        try:
            if action == 'void_order':
                study = services.void_order(order, reason)
            elif action == 'unvoid_order':
                study = services.unvoid_order(order)
            elif action == 'discontinue_order':
                study = services.discontinue_order(order, reason)
            else:
                study = services.undiscontinue_order(order)
        except BlockError as exc:
            if exc.is_not_found:
                raise
            messages.error(request, exc.message, extra_tags=exc.code)
            return redirect(patient_dashboard_url(order.patient_id))

        outcome = resolve_action_outcome(action, order, study)
        return self.respond(request, outcome, None, None, None)

    def respond(self, request, outcome, order_form, study_form, patient_id):
        if outcome.message:
            messages.add_message(request, outcome.level, outcome.message, extra_tags=outcome.code)
        if outcome.renders_form:
            return self.render_form(request, order_form, study_form, patient_id)
        return redirect(outcome.redirect_to)

    def render_form(self, request, order_form, study_form, patient_id):
        context = {
            'order_form': order_form,
            'study_form': study_form,
            'order': order_form.instance,
            'study': study_form.instance,
        }
        if patient_id is not None:
            context['patient_id'] = patient_id
        return render(request, self.template_name, context)


# ── HTML: lists ────────────────────────────────────────────────────────────

class RadiologyOrderListView(View):
    """GET /radiology/orders/?q= - order list"""

    template_name = 'radiology/radiology_order_list.html'

    def get(self, request):
        query = request.GET.get('q', '')
        orders = services.search_orders(query)
        return render(request, self.template_name, {'orders': orders, 'query': query})


class PatientDashboardView(NotFoundMixin, View):
    """GET /radiology/patients/<patient_id>/ - patient and their radiology orders"""

    template_name = 'radiology/patient_dashboard.html'

    def get(self, request, patient_id):
        patient = services.get_patient(patient_id)
        orders = services.get_patient_orders(patient)
        return render(request, self.template_name, {'patient': patient, 'orders': orders})


# ── JSON API ───────────────────────────────────────────────────────────────
#
# 错误由 unified_exception_handler（DRF）或 ExceptionHandlerMixin 统一格式化，view 里只管 raise。

class OrderDetailAPIView(APIView):
    """GET /api/orders/<order_id>/ - order + study"""

    def get(self, request, order_id):
        order = services.get_order(order_id)
        study = services.get_study_by_order(order)
        return Response(serialize_order_detail(order, study))


class OrderSearchAPIView(APIView):
    """GET /api/orders/search/?q= - order search"""

    def get(self, request):
        orders = services.search_orders(request.query_params.get('q', ''))
        return Response(serialize_search_results(orders))


class PatientOrdersJsonView(ExceptionHandlerMixin, View):
    """GET /api/patients/<patient_id>/orders/ - patient and their radiology orders"""

    def get(self, request, patient_id):
        patient = services.get_patient(patient_id)
        orders = services.get_patient_orders(patient)
        return JsonResponse(serialize_patient_orders(patient, orders))
