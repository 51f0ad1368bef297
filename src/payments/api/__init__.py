from payments.api.routes import razorpay_router

__all__ = ["razorpay_router"]
